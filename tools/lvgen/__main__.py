"""
CLI entry point for lvgen.

Usage:
    python3 -m tools.lvgen remote_protocol.x -o constants.gen.go
    python3 -m tools.lvgen remote_protocol.x -o constants.gen.go --config lvgen.yaml -v
"""

import argparse
import io
import logging
import os
import sys

from jinja2 import TemplateError

from .config import GeneratorConfig, load_config
from .errors import LvgenError
from .generate import generate


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate Go constants from an rpcgen protocol file")
    parser.add_argument("proto", help="Input protocol (.x) file")
    parser.add_argument("-o", "--output", required=True, help="Output .go file")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--package", help="Go package name (overrides config)")
    parser.add_argument("--template-dir",
                        help="Directory holding constants.tmpl (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else GeneratorConfig()
    except (LvgenError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    if args.package:
        config.package = args.package
    if args.template_dir:
        config.template_dir = args.template_dir

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level_value,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Render into memory so a failed run leaves no partial output file.
    buf = io.StringIO()
    try:
        with open(args.proto, "rb") as f:
            model = generate(f, buf, config,
                             source=os.path.basename(args.proto))
        with open(args.output, "w") as f:
            f.write(buf.getvalue())
    except (LvgenError, TemplateError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"  wrote {args.output}")
    print(f"\nGenerated {len(model.enums)} enums and {len(model.consts)} "
          f"consts (package {config.package})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
