from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Print the object states visible on a frame")


def command(subparser):
    subparser.add_argument("input", type=Path, help=_("Annotation JSON file"))
    subparser.add_argument("frame", type=int, help=_("Frame number"))

    def handle(args):
        from annotation_collection.cli.common import load_collection
        from annotation_collection.utils.misc import write_json

        collection = load_collection(args.input)
        states = collection.get(args.frame)
        write_json([state.to_dict() for state in states], indent=int(args.cfg.indent))

    return handle
