from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Show how many objects an annotation file holds")


def command(subparser):
    subparser.add_argument("input", type=Path, help=_("Annotation JSON file"))

    def handle(args):
        from annotation_collection.cli.common import load_collection
        from annotation_collection.utils.misc import write_json

        collection = load_collection(args.input)
        exported = collection.export()
        frames = [
            *(t["frame"] for t in exported["tags"]),
            *(s["frame"] for s in exported["shapes"]),
            *(k["frame"] for t in exported["tracks"] for k in t["shapes"]),
        ]
        write_json(
            {
                "tags": len(exported["tags"]),
                "shapes": len(exported["shapes"]),
                "tracks": len(exported["tracks"]),
                "first_frame": min(frames) if frames else None,
                "last_frame": max(frames) if frames else None,
            },
            indent=int(args.cfg.indent),
        )

    return handle
