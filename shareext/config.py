from pathlib import Path
from typing import Optional, Union

PLUGIN_ID = "cordova-plugin-openwith-cxm"
BUNDLE_SUFFIX = ".shareextension"
IOS_URL_SCHEME = "openwithcxm"
IOS_UNIFORM_TYPE_IDENTIFIER = "public.data"


class Config:
    def __init__(
        self,
        project_root: Union[str, Path],
        ios_root: Optional[Union[str, Path]] = None,
        plugin_id: str = PLUGIN_ID,
        target_name: str = "ShareExt",
        group_name: str = "ShareExtension",
        parent_group_name: str = "CustomTemplate",
        bundle_suffix: str = BUNDLE_SUFFIX,
        url_scheme: str = IOS_URL_SCHEME,
        uniform_type_identifier: str = IOS_UNIFORM_TYPE_IDENTIFIER,
        dry_run: bool = False,
        **kwargs
    ):
        self.project_root = Path(project_root)
        self.ios_root = Path(ios_root) if ios_root is not None else None
        self.plugin_id = plugin_id
        self.target_name = target_name
        # folder of the extension files, also the name of its group
        self.group_name = group_name
        self.parent_group_name = parent_group_name
        self.bundle_suffix = bundle_suffix
        self.url_scheme = url_scheme
        self.uniform_type_identifier = uniform_type_identifier
        self.dry_run = dry_run
        self.__dict__.update(kwargs)
