import argparse

from userapi.config.properties import reload_config
from userapi.core.server import run


def main(argv=None):
    parser = argparse.ArgumentParser(prog="userapi", description="User CRUD service")
    parser.add_argument("--host", help="Bind address (default: server.host)")
    parser.add_argument("--port", type=int, help="Bind port (default: server.port)")
    parser.add_argument("--profile", help="Configuration profile to activate")
    args = parser.parse_args(argv)

    if args.profile:
        reload_config(profile=args.profile)

    run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
