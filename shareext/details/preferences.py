# Copying the extension files into the iOS platform and filling in their tokens.

import shutil

from pathlib import Path
from typing import Iterable, List, Tuple

from shareext.config import Config
from shareext.details.errors import MissingInputError

Preference = Tuple[str, str]


def build_preferences(
    config: Config,
    project_name: str,
    bundle_id: str,
    short_version: str,
    version: str,
) -> List[Preference]:
    group_identifier = "group." + bundle_id + config.bundle_suffix
    return [
        ("__DISPLAY_NAME__", project_name),
        ("__BUNDLE_IDENTIFIER__", "$(PRODUCT_BUNDLE_IDENTIFIER)"),
        ("__GROUP_IDENTIFIER__", group_identifier),
        ("__BUNDLE_SHORT_VERSION_STRING__", short_version),
        ("__BUNDLE_VERSION__", version),
        ("__URL_SCHEME__", config.url_scheme),
        ("__UNIFORM_TYPE_IDENTIFIER__", config.uniform_type_identifier),
    ]


def replace_preferences(text: str, preferences: Iterable[Preference]) -> str:
    for token, value in preferences:
        text = text.replace(token, value)
    return text


def replace_preferences_in_file(path: Path, preferences: Iterable[Preference]) -> bool:
    """Rewrite a file with its tokens replaced. Returns whether it changed."""
    content = path.read_text(encoding="utf-8")
    replaced = replace_preferences(content, preferences)
    if replaced == content:
        return False
    path.write_text(replaced, encoding="utf-8")
    return True


def copy_extension_folder(source: Path, destination_root: Path) -> Path:
    """
    Copy a folder into destination_root, merging with an earlier copy.

    Returns:
        The copied folder.

    Raises:
        MissingInputError: If the source folder does not exist.
    """
    if not source.is_dir():
        raise MissingInputError(f"Missing extension project folder in {source}.")
    target = destination_root / source.name
    shutil.copytree(source, target, dirs_exist_ok=True)
    return target
