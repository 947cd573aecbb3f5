# Build setting patching for the configurations of one product.

from typing import List

from shareext.details.events import Event, EventKind, Observer, null_observer
from shareext.xcode.model import ProjectGraph, XCBuildConfiguration
from shareext.xcode.utils import always_quote, is_comment_key

BUNDLE_IDENTIFIER_SETTING = "PRODUCT_BUNDLE_IDENTIFIER"


def extension_bundle_identifier(app_identifier: str, suffix: str) -> str:
    return app_identifier + suffix


def patch_build_setting(
    graph: ProjectGraph,
    product_name: str,
    value: str,
    setting: str = BUNDLE_IDENTIFIER_SETTING,
    observer: Observer = null_observer,
) -> List[XCBuildConfiguration]:
    """
    Overwrite one setting in every build configuration of a product.

    Configurations are selected by their PRODUCT_NAME, written either bare or
    quoted, rather than by the target that owns them. The new value is always
    written quoted. Matching nothing is not an error.

    Args:
        graph: The project graph to mutate.
        product_name: PRODUCT_NAME of the configurations to patch.
        value: New value of the setting.
        setting: Name of the build setting to overwrite.
        observer: Receives progress events.

    Returns:
        The configurations that were patched.
    """
    accepted = (product_name, always_quote(product_name))
    patched: List[XCBuildConfiguration] = []
    for config_id, config in graph.items(XCBuildConfiguration):
        if is_comment_key(config_id):
            continue
        if (config.buildSettings or {}).get("PRODUCT_NAME") not in accepted:
            continue
        config.buildSettings[setting] = always_quote(value)
        patched.append(config)
        observer(
            Event(
                EventKind.SETTING_PATCHED,
                f"Set {setting} to {value} in {config.name} ({config_id}).",
            )
        )

    if not patched:
        observer(
            Event(
                EventKind.SETTING_NO_MATCH,
                f"No build configuration has PRODUCT_NAME {product_name}.",
            )
        )
    return patched
