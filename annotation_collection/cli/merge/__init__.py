import logging
from gettext import gettext as _
from pathlib import Path

logger = logging.getLogger(__name__)

COMMAND_DESCRIPTION = _("Merge shapes and tracks into a single track")


def command(subparser):
    subparser.add_argument("input", type=Path, help=_("Annotation JSON file"))
    subparser.add_argument(
        "client_ids",
        type=int,
        nargs="+",
        help=_("Client ids of the objects to merge, as assigned on import"),
    )
    subparser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=_("Where to save the merged annotations (stdout if omitted)"),
    )
    subparser.add_argument(
        "--overwrite",
        action="store_true",
        help=_("Overwrite the output file if it exists"),
    )

    def handle(args):
        from annotation_collection.cli.common import load_collection
        from annotation_collection.core.collection import ArgumentError
        from annotation_collection.utils.misc import read_json, write_json

        if args.output is not None and not args.overwrite:
            assert not args.output.exists(), _(
                "Output file exists, use --overwrite to ignore this"
            )

        collection = load_collection(args.input)
        states = []
        for client_id in args.client_ids:
            if client_id not in collection:
                raise ArgumentError(
                    _("No object with client id {client_id}").format(
                        client_id=client_id
                    )
                )
            frame = collection.objects[client_id].frame
            states.extend(s for s in collection.get(frame) if s.client_id == client_id)

        track = collection.merge(states)
        logger.info(
            _("Created track {client_id} starting on frame {frame}").format(
                client_id=track.client_id, frame=track.frame
            )
        )

        result = collection.export()
        result["labels"] = read_json(args.input)["labels"]
        write_json(result, args.output, indent=int(args.cfg.indent))

    return handle
