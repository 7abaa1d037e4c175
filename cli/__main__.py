"""Console entry point: `python -m cli` or the `sprout` script."""

import argparse
import sys

from cli.api_client import SproutAPIClient
from cli.console import ConsoleUI


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='sprout', description='Build words from sound chunks, then sentences')
    parser.add_argument('--server', default='http://localhost:8000', help='sprout server URL')
    parser.add_argument('--user', default='default', help='learner id; progress is saved per learner')

    profile = parser.add_argument_group('learner profile')
    profile.add_argument('--age', type=int, help='learner age, picks the starting tier for a new learner')
    profile.add_argument('--theme', help='word theme (see --themes)')

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument('--themes', action='store_true', help='list the available themes and exit')
    actions.add_argument('--forget', action='store_true', help="delete the learner's saved progress and exit")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    ui = ConsoleUI(SproutAPIClient(base_url=args.server, user_id=args.user))

    if args.themes:
        ui.list_themes()
        return
    if args.forget:
        ui.forget()
        return

    try:
        ui.run(age=args.age, theme=args.theme)
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
