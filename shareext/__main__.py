from argparse import ArgumentParser
import sys

from shareext import Config
from shareext.config import PLUGIN_ID
from shareext.details.errors import ParseError, ShareExtError
from shareext.details.events import PrintObserver
from shareext.details.tools.add_target import add_target_main
from shareext.details.tools.copy import copy_main
from shareext.details.tools.install import install_main


def red_error(plugin_id: str, message: str) -> str:
    return f'"{plugin_id}" \x1b[1m\x1b[31m{message}\x1b[0m'


def main(argv=None):
    COMMANDS = {
        "copy": copy_main,
        "add-target": add_target_main,
        "install": install_main,
    }
    parser = ArgumentParser(prog="shareext")
    parser.add_argument("command", choices=COMMANDS.keys())
    parser.add_argument("--project-root", type=str, default=".")
    parser.add_argument("--ios-root", type=str, default=None)
    parser.add_argument("--plugin-id", type=str, default=PLUGIN_ID)
    parser.add_argument("--target-name", type=str, default="ShareExt")
    parser.add_argument("--group-name", type=str, default="ShareExtension")
    parser.add_argument("--parent-group", type=str, default="CustomTemplate")
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    config = Config(
        project_root=args.project_root,
        ios_root=args.ios_root,
        plugin_id=args.plugin_id,
        target_name=args.target_name,
        group_name=args.group_name,
        parent_group_name=args.parent_group,
        dry_run=args.dry_run,
    )
    print(f'Running {args.command} for "{config.plugin_id}/{config.group_name}"')
    try:
        COMMANDS[args.command](config, PrintObserver())
    except (ShareExtError, ParseError) as e:
        print(red_error(config.plugin_id, str(e)), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
