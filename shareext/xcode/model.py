# Xcode project file model.
#
# This module defines the typed node records of a loaded project file (.pbxproj)
# and the ProjectGraph that owns them. Nodes are indexed by their XcodeID and
# point at each other through typed Reference values, never through raw strings.
#
# String values keep their on-disk spelling (quotes included) so that untouched
# settings are written back exactly as they were read.

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)
import uuid

from shareext.details.errors import IntegrityError


# Type definition for Xcode object identifiers
class XcodeID(str):
    pass


def generate_id(key: str) -> XcodeID:
    return XcodeID(uuid.uuid5(uuid.NAMESPACE_X500, key).hex.upper()[:24])


# Source Tree values used in PBXFileReference and PBXGroup
class SourceTree(Enum):
    GROUP = "<group>"
    SOURCE_ROOT = "SOURCE_ROOT"
    BUILT_PRODUCTS_DIR = "BUILT_PRODUCTS_DIR"


# Destination subfolder specifications used in PBXCopyFilesBuildPhase
class DstSubfolderSpec(Enum):
    ABSOLUTE_PATH = 0
    WRAPPER = 1
    EXECUTABLES = 6
    RESOURCES = 7
    FRAMEWORKS = 10
    SHARED_FRAMEWORKS = 11
    SHARED_SUPPORT = 12
    PLUGINS = 13  # App extensions are embedded here
    JAVA_RESOURCES = 15
    PRODUCTS_DIRECTORY = 16


# File types used in PBXFileReference
class FileType(Enum):
    C = "sourcecode.c.c"
    CPP = "sourcecode.cpp.cpp"
    C_HEADER = "sourcecode.c.h"
    CPP_HEADER = "sourcecode.cpp.h"
    SWIFT = "sourcecode.swift"
    OBJC = "sourcecode.c.objc"
    OBJCPP = "sourcecode.cpp.objcpp"
    XIB = "file.xib"
    STORYBOARD = "file.storyboard"
    PLIST = "text.plist.xml"
    ENTITLEMENTS = "text.plist.entitlements"
    STRINGS = "text.plist.strings"
    ASSET_CATALOG = "folder.assetcatalog"
    IMAGE_PNG = "image.png"
    IMAGE_JPEG = "image.jpeg"
    FRAMEWORK = "wrapper.framework"
    BUNDLE = "wrapper.plug-in"
    APP_EXTENSION = "wrapper.app-extension"
    TEXT = "text"

    @staticmethod
    def from_extension(ext: str) -> "FileType":
        if ext.startswith("."):
            ext = ext[1:]

        ext_to_type = {
            "c": FileType.C,
            "cpp": FileType.CPP,
            "h": FileType.C_HEADER,
            "hpp": FileType.CPP_HEADER,
            "swift": FileType.SWIFT,
            "m": FileType.OBJC,
            "mm": FileType.OBJCPP,
            "xib": FileType.XIB,
            "storyboard": FileType.STORYBOARD,
            "plist": FileType.PLIST,
            "entitlements": FileType.ENTITLEMENTS,
            "strings": FileType.STRINGS,
            "xcassets": FileType.ASSET_CATALOG,
            "png": FileType.IMAGE_PNG,
            "jpg": FileType.IMAGE_JPEG,
            "jpeg": FileType.IMAGE_JPEG,
            "framework": FileType.FRAMEWORK,
            "bundle": FileType.BUNDLE,
            "appex": FileType.APP_EXTENSION,
        }

        return ext_to_type.get(ext.lower(), FileType.TEXT)


# Product types used in PBXNativeTarget
class ProductType(Enum):
    APPLICATION = "com.apple.product-type.application"
    FRAMEWORK = "com.apple.product-type.framework"
    STATIC_LIBRARY = "com.apple.product-type.library.static"
    BUNDLE = "com.apple.product-type.bundle"
    APP_EXTENSION = "com.apple.product-type.app-extension"


# Boolean-like values used in build settings
class YesNo(Enum):
    YES = "YES"
    NO = "NO"


class ProxyType(Enum):
    TARGET_DEPENDENCY = 1
    PRODUCT_REFERENCE = 2


ReferenceT = TypeVar("ReferenceT", bound="XcodeObject")


@dataclass
class Reference(Generic[ReferenceT]):
    id: XcodeID
    comment: Optional[str] = None


# Values found in a parsed project: raw strings, references, and nested containers
Value = Union[str, int, Reference, List[Any], Dict[str, Any]]


# Base class for all Xcode objects
@dataclass
class XcodeObject:
    # Assigned by ProjectGraph.add or by the parser
    id: XcodeID = field(init=False)
    # Comment written next to the object id
    comment: Optional[str] = field(init=False, default=None)
    # Properties the model does not name, written back untouched
    extra: Dict[str, Value] = field(init=False, default_factory=dict)

    # field name -> isa names the field may point at (empty: any kind)
    REFERENCES: ClassVar[Dict[str, Tuple[str, ...]]] = {}

    @property
    def isa(self) -> str:
        return self.__class__.__name__

    def ref(self) -> Reference:
        return Reference(id=self.id, comment=self.comment)

    def ref_list(self, name: str) -> List[Reference]:
        # a list absent from the file is created on first append
        value = getattr(self, name)
        if value is None:
            value = []
            setattr(self, name, value)
        return value


FILE_ELEMENTS = (
    "PBXFileReference",
    "PBXGroup",
    "PBXVariantGroup",
    "XCVersionGroup",
    "PBXReferenceProxy",
)
BUILD_PHASES = (
    "PBXSourcesBuildPhase",
    "PBXResourcesBuildPhase",
    "PBXFrameworksBuildPhase",
    "PBXHeadersBuildPhase",
    "PBXCopyFilesBuildPhase",
    "PBXShellScriptBuildPhase",
)


# PBX* object types
@dataclass
class PBXFileReference(XcodeObject):
    path: Optional[str] = None
    name: Optional[str] = None
    sourceTree: Optional[str] = None
    lastKnownFileType: Optional[str] = None
    explicitFileType: Optional[str] = None
    includeInIndex: Optional[Union[str, int]] = None
    fileEncoding: Optional[Union[str, int]] = None


@dataclass
class PBXBuildFile(XcodeObject):
    fileRef: Optional[Reference[PBXFileReference]] = None
    settings: Optional[Dict[str, Value]] = None

    REFERENCES = {"fileRef": FILE_ELEMENTS}


@dataclass
class PBXGroup(XcodeObject):
    children: Optional[List[Reference[XcodeObject]]] = None
    name: Optional[str] = None
    path: Optional[str] = None
    sourceTree: Optional[str] = None

    REFERENCES = {"children": FILE_ELEMENTS}


@dataclass
class PBXVariantGroup(PBXGroup):
    pass


@dataclass
class PBXBuildPhase(XcodeObject):
    files: Optional[List[Reference[PBXBuildFile]]] = None
    buildActionMask: Optional[Union[str, int]] = None
    runOnlyForDeploymentPostprocessing: Optional[Union[str, int]] = None
    name: Optional[str] = None

    REFERENCES = {"files": ("PBXBuildFile",)}

    # Comment Xcode writes for a phase that has no explicit name
    DEFAULT_NAME: ClassVar[str] = ""

    def display_name(self) -> str:
        return self.name or self.DEFAULT_NAME


@dataclass
class PBXSourcesBuildPhase(PBXBuildPhase):
    DEFAULT_NAME = "Sources"


@dataclass
class PBXResourcesBuildPhase(PBXBuildPhase):
    DEFAULT_NAME = "Resources"


@dataclass
class PBXFrameworksBuildPhase(PBXBuildPhase):
    DEFAULT_NAME = "Frameworks"


@dataclass
class PBXHeadersBuildPhase(PBXBuildPhase):
    DEFAULT_NAME = "Headers"


@dataclass
class PBXCopyFilesBuildPhase(PBXBuildPhase):
    dstPath: Optional[str] = None
    dstSubfolderSpec: Optional[Union[str, int]] = None

    DEFAULT_NAME = "CopyFiles"


@dataclass
class PBXShellScriptBuildPhase(PBXBuildPhase):
    shellScript: Optional[str] = None

    DEFAULT_NAME = "ShellScript"


@dataclass
class PBXContainerItemProxy(XcodeObject):
    containerPortal: Optional[Reference[XcodeObject]] = None
    proxyType: Optional[Union[str, int]] = None
    remoteGlobalIDString: Optional[Union[str, Reference[XcodeObject]]] = None
    remoteInfo: Optional[str] = None

    # remoteGlobalIDString may name an object of another project file
    REFERENCES = {"containerPortal": ("PBXProject", "PBXFileReference")}


@dataclass
class PBXTargetDependency(XcodeObject):
    target: Optional[Reference[XcodeObject]] = None
    targetProxy: Optional[Reference[PBXContainerItemProxy]] = None
    name: Optional[str] = None

    REFERENCES = {
        "target": ("PBXNativeTarget", "PBXAggregateTarget", "PBXLegacyTarget"),
        "targetProxy": ("PBXContainerItemProxy",),
    }


@dataclass
class XCBuildConfiguration(XcodeObject):
    name: Optional[str] = None
    buildSettings: Optional[Dict[str, Value]] = None
    baseConfigurationReference: Optional[Reference[PBXFileReference]] = None

    REFERENCES = {"baseConfigurationReference": ("PBXFileReference",)}


@dataclass
class XCConfigurationList(XcodeObject):
    buildConfigurations: Optional[List[Reference[XCBuildConfiguration]]] = None
    defaultConfigurationIsVisible: Optional[Union[str, int]] = None
    defaultConfigurationName: Optional[str] = None

    REFERENCES = {"buildConfigurations": ("XCBuildConfiguration",)}


@dataclass
class PBXNativeTarget(XcodeObject):
    name: Optional[str] = None
    buildConfigurationList: Optional[Reference[XCConfigurationList]] = None
    buildPhases: Optional[List[Reference[PBXBuildPhase]]] = None
    buildRules: Optional[List[Reference[XcodeObject]]] = None
    dependencies: Optional[List[Reference[PBXTargetDependency]]] = None
    productName: Optional[str] = None
    productReference: Optional[Reference[PBXFileReference]] = None
    productType: Optional[str] = None

    REFERENCES = {
        "buildConfigurationList": ("XCConfigurationList",),
        "buildPhases": BUILD_PHASES,
        "buildRules": ("PBXBuildRule",),
        "dependencies": ("PBXTargetDependency",),
        "productReference": ("PBXFileReference",),
    }


@dataclass
class PBXProject(XcodeObject):
    buildConfigurationList: Optional[Reference[XCConfigurationList]] = None
    mainGroup: Optional[Reference[PBXGroup]] = None
    productRefGroup: Optional[Reference[PBXGroup]] = None
    targets: Optional[List[Reference[XcodeObject]]] = None

    REFERENCES = {
        "buildConfigurationList": ("XCConfigurationList",),
        "mainGroup": ("PBXGroup",),
        "productRefGroup": ("PBXGroup",),
        "targets": ("PBXNativeTarget", "PBXAggregateTarget", "PBXLegacyTarget"),
    }


# Record of a kind the model does not type, kept verbatim
@dataclass
class PBXUnknownObject(XcodeObject):
    kind: str = ""
    properties: Dict[str, Value] = field(default_factory=dict)

    @property
    def isa(self) -> str:
        return self.kind


OBJECT_TYPES: Dict[str, Type[XcodeObject]] = {
    cls.__name__: cls
    for cls in (
        PBXBuildFile,
        PBXFileReference,
        PBXGroup,
        PBXVariantGroup,
        PBXSourcesBuildPhase,
        PBXResourcesBuildPhase,
        PBXFrameworksBuildPhase,
        PBXHeadersBuildPhase,
        PBXCopyFilesBuildPhase,
        PBXShellScriptBuildPhase,
        PBXContainerItemProxy,
        PBXTargetDependency,
        XCBuildConfiguration,
        XCConfigurationList,
        PBXNativeTarget,
        PBXProject,
    )
}

ObjectT = TypeVar("ObjectT", bound=XcodeObject)
PhaseT = TypeVar("PhaseT", bound=PBXBuildPhase)


# Complete project representation
@dataclass
class ProjectGraph:
    # Top-level keys other than objects and rootObject (archiveVersion, classes, ...)
    header: Dict[str, Value]
    objects: Dict[XcodeID, XcodeObject]
    rootObject: Reference[PBXProject]

    def contains(self, object_id: str) -> bool:
        return object_id in self.objects

    def get(self, ref: Union[Reference, str], kind: Type[ObjectT]) -> ObjectT:
        object_id = ref.id if isinstance(ref, Reference) else ref
        obj = self.objects.get(XcodeID(object_id))
        if obj is None:
            raise KeyError(f"no object with id {object_id}")
        if not isinstance(obj, kind):
            raise TypeError(
                f"object {object_id} is a {obj.isa}, expected {kind.__name__}"
            )
        return obj

    def items(self, kind: Type[ObjectT]) -> Iterator[Tuple[XcodeID, ObjectT]]:
        for object_id, obj in self.objects.items():
            if type(obj) is kind:
                yield object_id, obj

    def section(self, kind: Type[ObjectT]) -> Iterator[ObjectT]:
        for _, obj in self.items(kind):
            yield obj

    def add(self, obj: ObjectT, key: str, comment: Optional[str] = None) -> ObjectT:
        """Store a new object under the id derived from key, which names its owner."""
        object_id = generate_id(key)
        if object_id in self.objects:
            raise IntegrityError(
                f"cannot add {obj.isa} {object_id}: id already used by "
                f"{self.objects[object_id].isa}"
            )
        obj.id = object_id
        if comment is not None:
            obj.comment = comment
        self.objects[object_id] = obj
        return obj

    @property
    def project(self) -> PBXProject:
        return self.get(self.rootObject, PBXProject)

    def native_targets(self) -> List[PBXNativeTarget]:
        return [
            self.get(ref, PBXNativeTarget)
            for ref in self.project.targets or []
            if isinstance(self.objects.get(ref.id), PBXNativeTarget)
        ]

    def main_target(self) -> Optional[PBXNativeTarget]:
        targets = self.native_targets()
        return targets[0] if targets else None

    def build_phase(
        self, target: PBXNativeTarget, kind: Type[PhaseT]
    ) -> Optional[PhaseT]:
        for ref in target.buildPhases or []:
            phase = self.objects.get(ref.id)
            if type(phase) is kind:
                return phase
        return None
