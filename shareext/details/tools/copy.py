from shareext import Config
from shareext.details.events import Event, EventKind, Observer, null_observer
from shareext.details.files import FileKind, group_by_kind, list_extension_files
from shareext.details.platform import (
    extension_source_folder,
    find_xcode_project,
    ios_folder,
    read_app_versions,
    read_bundle_id,
)
from shareext.details.preferences import (
    build_preferences,
    copy_extension_folder,
    replace_preferences_in_file,
)


def copy_main(config: Config, observer: Observer = null_observer):
    project = find_xcode_project(config)
    observer(Event(EventKind.PROJECT_FOUND, f"Found {project.folder}."))

    copied = copy_extension_folder(extension_source_folder(config), ios_folder(config))
    observer(Event(EventKind.FOLDER_COPIED, f"Copied {config.group_name} to {copied}."))

    files = group_by_kind(list_extension_files(copied))
    for kind in FileKind:
        for file in files[kind]:
            observer(Event(EventKind.FILE_LISTED, f"Found {kind.value} file {file.name}."))

    bundle_id = read_bundle_id(config)
    short_version, version = read_app_versions(config, project.name)
    preferences = build_preferences(
        config, project.name, bundle_id, short_version, version
    )
    for file in files[FileKind.PLIST] + files[FileKind.SOURCE]:
        replace_preferences_in_file(file.path, preferences)
        observer(Event(EventKind.TOKENS_REPLACED, f"Successfully updated {file.name}."))
