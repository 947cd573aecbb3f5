# Errors raised while installing the share extension.
#
# Every error is raised before the project file is written back, so a failed
# run leaves the host project untouched.


class ShareExtError(RuntimeError):
    pass


# A required folder, file, attribute, or parent group is missing
class MissingInputError(ShareExtError):
    pass


# More than one candidate matched where exactly one is expected
class AmbiguousInputError(ShareExtError):
    pass


# The graph would contain a dangling or mistyped reference
class IntegrityError(ShareExtError):
    pass


class ParseError(ValueError):
    def __init__(self, message: str, line: int):
        super().__init__(f"line {line}: {message}")
        self.line = line
