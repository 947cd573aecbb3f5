from shareext import Config
from shareext.details.errors import IntegrityError
from shareext.details.events import Event, EventKind, Observer, null_observer
from shareext.details.files import list_extension_files
from shareext.details.platform import extension_folder, find_xcode_project, read_bundle_id
from shareext.xcode.extension import ExtensionSpec, install_extension
from shareext.xcode.formatter import format_project
from shareext.xcode.parser import parse_project
from shareext.xcode.settings import extension_bundle_identifier
from shareext.xcode.validator import validate_references


def add_target_main(config: Config, observer: Observer = null_observer):
    project = find_xcode_project(config)
    observer(Event(EventKind.PROJECT_FOUND, f"Found {project.folder}."))

    bundle_id = read_bundle_id(config)
    # listing first: a missing extension folder aborts before anything is parsed
    files = list_extension_files(extension_folder(config))

    with open(project.pbxproj, "r", encoding="utf-8") as f:
        graph = parse_project(f.read())
    observer(Event(EventKind.PROJECT_PARSED, f"Parsed {project.pbxproj}."))

    spec = ExtensionSpec(
        target_name=config.target_name,
        product_subfolder=config.group_name,
        group_name=config.group_name,
        group_path=config.group_name,
        parent_group_name=config.parent_group_name,
        bundle_identifier=extension_bundle_identifier(bundle_id, config.bundle_suffix),
    )
    install_extension(graph, spec, files, observer)

    if errors := validate_references(graph):
        raise IntegrityError(f"Invalid project: {errors}")

    if config.dry_run:
        return

    # Write back last, after every step succeeded
    project_str = format_project(graph)
    with open(project.pbxproj, "w", encoding="utf-8") as f:
        f.write(project_str)
    observer(Event(EventKind.PROJECT_WRITTEN, f"Added {config.group_name} to the Xcode project."))
