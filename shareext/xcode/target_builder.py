# Extension target construction.
#
# Creates a native target with its build configurations, product reference and
# empty Sources/Resources phases, registers it with the project, and embeds its
# product into the main application target.

from dataclasses import dataclass
from typing import Dict, List

from shareext.details.events import Event, EventKind, Observer, null_observer
from shareext.xcode.model import (
    DstSubfolderSpec,
    FileType,
    PBXBuildFile,
    PBXContainerItemProxy,
    PBXCopyFilesBuildPhase,
    PBXFileReference,
    PBXGroup,
    PBXNativeTarget,
    PBXResourcesBuildPhase,
    PBXSourcesBuildPhase,
    PBXTargetDependency,
    ProductType,
    ProjectGraph,
    ProxyType,
    Reference,
    SourceTree,
    Value,
    XCBuildConfiguration,
    XCConfigurationList,
    YesNo,
)
from shareext.xcode.resolver import find_target_by_name
from shareext.xcode.utils import always_quote, quote

EMBED_PHASE_NAME = "Embed App Extensions"

# buildActionMask Xcode writes for every phase
BUILD_ACTION_MASK = 2147483647

RUNPATH_SEARCH_PATHS = (
    "$(inherited) @executable_path/Frameworks @executable_path/../../Frameworks"
)


@dataclass(frozen=True)
class NewTarget:
    target: PBXNativeTarget
    sources_phase: PBXSourcesBuildPhase
    resources_phase: PBXResourcesBuildPhase
    product: PBXFileReference


def _build_settings(name: str, subfolder: str, debug: bool) -> Dict[str, Value]:
    settings: Dict[str, Value] = {}
    if debug:
        settings["GCC_PREPROCESSOR_DEFINITIONS"] = [
            always_quote("DEBUG=1"),
            always_quote("$(inherited)"),
        ]
    settings["INFOPLIST_FILE"] = quote(f"{subfolder}/{subfolder}-Info.plist")
    settings["LD_RUNPATH_SEARCH_PATHS"] = quote(RUNPATH_SEARCH_PATHS)
    settings["PRODUCT_NAME"] = always_quote(name)
    settings["SKIP_INSTALL"] = YesNo.YES.value
    return settings


def _add_configuration_list(
    graph: ProjectGraph, name: str, subfolder: str
) -> XCConfigurationList:
    configurations: List[Reference[XCBuildConfiguration]] = []
    for config_name in ("Debug", "Release"):
        configuration = graph.add(
            XCBuildConfiguration(
                name=config_name,
                buildSettings=_build_settings(
                    name, subfolder, debug=config_name == "Debug"
                ),
            ),
            key=f"XCBuildConfiguration:{name}:{config_name}",
            comment=config_name,
        )
        configurations.append(configuration.ref())

    return graph.add(
        XCConfigurationList(
            buildConfigurations=configurations,
            defaultConfigurationIsVisible=0,
            defaultConfigurationName="Release",
        ),
        key=f"XCConfigurationList:{name}",
        comment=f'Build configuration list for PBXNativeTarget "{name}"',
    )


def _add_product(graph: ProjectGraph, name: str) -> PBXFileReference:
    product_name = f"{name}.appex"
    product = graph.add(
        PBXFileReference(
            explicitFileType=quote(FileType.APP_EXTENSION.value),
            includeInIndex=0,
            path=quote(product_name),
            sourceTree=SourceTree.BUILT_PRODUCTS_DIR.value,
        ),
        key=f"PBXFileReference:{product_name}",
        comment=product_name,
    )
    products_ref = graph.project.productRefGroup
    if products_ref is not None:
        graph.get(products_ref, PBXGroup).ref_list("children").append(product.ref())
    return product


def _embed_in_main_target(
    graph: ProjectGraph,
    main: PBXNativeTarget,
    target: PBXNativeTarget,
    product: PBXFileReference,
) -> None:
    embed_phase = None
    for ref in main.buildPhases or []:
        phase = graph.objects.get(ref.id)
        if (
            isinstance(phase, PBXCopyFilesBuildPhase)
            and str(phase.dstSubfolderSpec) == str(DstSubfolderSpec.PLUGINS.value)
        ):
            embed_phase = phase
            break
    if embed_phase is None:
        embed_phase = graph.add(
            PBXCopyFilesBuildPhase(
                files=[],
                buildActionMask=BUILD_ACTION_MASK,
                name=quote(EMBED_PHASE_NAME),
                dstPath='""',
                dstSubfolderSpec=DstSubfolderSpec.PLUGINS.value,
                runOnlyForDeploymentPostprocessing=0,
            ),
            key=f"PBXCopyFilesBuildPhase:{main.id}:{EMBED_PHASE_NAME}",
            comment=EMBED_PHASE_NAME,
        )
        main.ref_list("buildPhases").append(embed_phase.ref())

    build_file = graph.add(
        PBXBuildFile(
            fileRef=product.ref(),
            settings={"ATTRIBUTES": ["RemoveHeadersOnCopy"]},
        ),
        key=f"PBXBuildFile:{product.id}:{embed_phase.id}",
        comment=f"{product.comment} in {embed_phase.comment or EMBED_PHASE_NAME}",
    )
    embed_phase.ref_list("files").append(build_file.ref())

    proxy = graph.add(
        PBXContainerItemProxy(
            containerPortal=Reference(id=graph.rootObject.id, comment="Project object"),
            proxyType=ProxyType.TARGET_DEPENDENCY.value,
            remoteGlobalIDString=target.id,
            remoteInfo=quote(target.comment or ""),
        ),
        key=f"PBXContainerItemProxy:{main.id}:{target.id}",
        comment="PBXContainerItemProxy",
    )
    dependency = graph.add(
        PBXTargetDependency(target=target.ref(), targetProxy=proxy.ref()),
        key=f"PBXTargetDependency:{main.id}:{target.id}",
        comment="PBXTargetDependency",
    )
    main.ref_list("dependencies").append(dependency.ref())


def add_target(
    graph: ProjectGraph,
    name: str,
    subfolder: str,
    product_type: ProductType = ProductType.APP_EXTENSION,
    observer: Observer = null_observer,
) -> NewTarget:
    """
    Create a new native target and everything Xcode needs to build it.

    Args:
        graph: The project graph to mutate.
        name: Name of the new target, also used as its product name.
        subfolder: Folder holding the target's Info.plist.
        product_type: Kind of product the target builds.
        observer: Receives progress events.

    Returns:
        The new target, its two build phases and its product reference.

    Raises:
        ValueError: If a target with this name already exists.
    """
    if find_target_by_name(graph, name) is not None:
        raise ValueError(f"target {name} already exists")

    # The first target is the application the extension is embedded into
    main = graph.main_target()

    config_list = _add_configuration_list(graph, name, subfolder)
    product = _add_product(graph, name)

    sources_phase = graph.add(
        PBXSourcesBuildPhase(
            files=[],
            buildActionMask=BUILD_ACTION_MASK,
            runOnlyForDeploymentPostprocessing=0,
        ),
        key=f"PBXSourcesBuildPhase:{name}",
        comment="Sources",
    )
    resources_phase = graph.add(
        PBXResourcesBuildPhase(
            files=[],
            buildActionMask=BUILD_ACTION_MASK,
            runOnlyForDeploymentPostprocessing=0,
        ),
        key=f"PBXResourcesBuildPhase:{name}",
        comment="Resources",
    )

    target = graph.add(
        PBXNativeTarget(
            name=quote(name),
            buildConfigurationList=config_list.ref(),
            buildPhases=[sources_phase.ref(), resources_phase.ref()],
            buildRules=[],
            dependencies=[],
            productName=quote(name),
            productReference=product.ref(),
            productType=quote(product_type.value),
        ),
        key=f"PBXNativeTarget:{name}",
        comment=name,
    )
    graph.project.ref_list("targets").append(target.ref())

    if main is None:
        observer(
            Event(
                EventKind.TARGET_EMBED_SKIPPED,
                f"No application target to embed {name} into.",
            )
        )
    else:
        _embed_in_main_target(graph, main, target, product)

    observer(Event(EventKind.TARGET_CREATED, f"Created target {name}."))
    return NewTarget(
        target=target,
        sources_phase=sources_phase,
        resources_phase=resources_phase,
        product=product,
    )
