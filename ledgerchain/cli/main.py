# MIT License
# Copyright (c) 2025 Hashborn

import argparse
import logging
import os
import sys
from uvicorn import Config, Server
from .commands import CommandError, CommandProcessor, process_file
from .. import api
from ..blockchain.rpc import api as rpc

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"

def cmd_run(args):
    """Run a command script."""
    if not os.path.exists(args.script):
        print(f"Error: script {args.script} not found")
        sys.exit(1)
    errors = process_file(args.script)
    if errors and args.strict:
        sys.exit(1)

def cmd_exec(args):
    """Run commands given on the command line, one per argument."""
    processor = CommandProcessor()
    for command in args.commands:
        try:
            processor.process(command)
        except CommandError as e:
            print(f"Failed due to: {e.reason} for Command: {e.command}")
            sys.exit(1)

def cmd_serve(args):
    """Create the ledger and serve it over HTTP."""
    rpc.ledger = api.create_ledger(args.name, args.description, args.seed)
    logger.info(f"Serving ledger '{args.name}' on {args.host}:{args.port}")

    config = Config(app=rpc.app, host=args.host, port=args.port, log_level=args.log_level.lower())
    server = Server(config)
    try:
        server.run()
    except KeyboardInterrupt:
        pass

def main():
    parser = argparse.ArgumentParser(description="LedgerChain CLI")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LEDGER_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Process a command script")
    run_parser.add_argument("script", help="Path to the script file")
    run_parser.add_argument("--strict", action="store_true", help="Exit non-zero on malformed commands")

    exec_parser = subparsers.add_parser("exec", help="Process commands passed as arguments")
    exec_parser.add_argument("commands", nargs="+", help="Quoted commands, e.g. 'create-account alice'")

    serve_parser = subparsers.add_parser("serve", help="Serve the ledger over HTTP")
    serve_parser.add_argument("--name", default="ledger", help="Ledger name")
    serve_parser.add_argument("--description", default="", help="Ledger description")
    serve_parser.add_argument("--seed", required=True, help="Seed mixed into every block hash")
    serve_parser.add_argument("--host", default="127.0.0.1", help="RPC Host")
    serve_parser.add_argument("--port", type=int, default=8000, help="RPC Port")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.command == "run":
        cmd_run(args)
    elif args.command == "exec":
        cmd_exec(args)
    elif args.command == "serve":
        cmd_serve(args)

if __name__ == "__main__":
    main()
