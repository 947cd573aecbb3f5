from shareext import Config
from shareext.details.events import Observer, null_observer
from shareext.details.tools.add_target import add_target_main
from shareext.details.tools.copy import copy_main


def install_main(config: Config, observer: Observer = null_observer):
    copy_main(config, observer)
    add_target_main(config, observer)
