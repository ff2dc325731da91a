import argparse
import json
import sys
from typing import Optional

from . import api
from .client import TrackerClient
from .models import CallResult
from .replies import AccountInfo, Authenticated, Reply, TrackInfo, VersionInfo, parse_reply
from .utils import format_hms


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='timetracker-cli')
    p.add_argument('--server', help='Server base URL (default: TIMETRACKER_BASE_URL or built-in)')
    sub = p.add_subparsers(dest='cmd', required=True)

    sub.add_parser('version')

    def with_account(name: str) -> argparse.ArgumentParser:
        cmd = sub.add_parser(name)
        cmd.add_argument('--username', required=True)
        cmd.add_argument('--password', required=True)
        return cmd

    with_account('register')

    tracks = with_account('tracks')
    tracks.add_argument('--json', action='store_true')

    count = with_account('count')
    count.add_argument('track')
    count.add_argument('--json', action='store_true')

    new = with_account('new')
    new.add_argument('track')

    delete = with_account('delete')
    delete.add_argument('track')

    save = with_account('save')
    save.add_argument('track')
    save.add_argument('seconds', type=int)

    return p


def _interpret(result: CallResult) -> Reply:
    if not result.ok:
        return Reply(False, result.body)
    return parse_reply(result.body)


def _fail(reply: Reply) -> int:
    print(f'Error: {reply.message or "request failed"}', file=sys.stderr)
    return 1


def _login(client: TrackerClient, username: str, password: str) -> Optional[Authenticated]:
    reply = _interpret(api.login(client, username, password))
    if isinstance(reply, Authenticated):
        return reply
    _fail(reply)
    return None


def run(args: argparse.Namespace, client: TrackerClient) -> int:
    if args.cmd == 'version':
        reply = _interpret(api.version(client))
        if not isinstance(reply, VersionInfo):
            return _fail(reply)
        print(f"{reply.name} {reply.version}")
        if reply.description:
            print(reply.description)
        return 0

    if args.cmd == 'register':
        reply = _interpret(api.register(client, args.username, args.password))
        if not reply.ok:
            return _fail(reply)
        print(reply.message or 'OK')
        return 0

    auth = _login(client, args.username, args.password)
    if auth is None:
        return 1

    if args.cmd == 'tracks':
        reply = _interpret(api.account(client, auth.uid))
        if not isinstance(reply, AccountInfo):
            return _fail(reply)
        if args.json:
            print(json.dumps(reply.tracks, indent=2))
        else:
            for name in reply.tracks:
                print(name)
        return 0

    if args.cmd == 'count':
        reply = _interpret(api.count(client, auth.uid, args.track))
        if not isinstance(reply, TrackInfo) or reply.seconds is None:
            return _fail(reply)
        if args.json:
            print(json.dumps({'track': args.track, 'seconds': reply.seconds}, indent=2))
        else:
            print(f"{args.track}\t{format_hms(reply.seconds)}")
        return 0

    if args.cmd == 'new':
        reply = _interpret(api.new_track(client, auth.uid, args.track))
    elif args.cmd == 'delete':
        reply = _interpret(api.delete(client, auth.uid, args.track))
    elif args.cmd == 'save':
        reply = _interpret(api.update(client, auth.uid, args.track, args.seconds))
    else:
        return 1

    if not reply.ok:
        return _fail(reply)
    print(reply.message or 'OK')
    return 0


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    client = TrackerClient(base_url=args.server)
    try:
        return run(args, client)
    finally:
        client.close()


if __name__ == '__main__':
    raise SystemExit(main())
