"""
Generation run: protocol stream in, Go constants out.

The lexer runs on its own thread, one token ahead of the parser.  Everything
after parsing (name transform, template load, rendering) runs on the calling
thread.
"""

import logging
from typing import IO, Optional

from .config import GeneratorConfig
from .emitter import load_template, render, transform_names
from .errors import InputError
from .lexer import Lexer
from .parser import Parser
from .symbols import Accumulator, Generator

logger = logging.getLogger(__name__)


def parse_protocol(text: str) -> Generator:
    """
    Tokenize and parse protocol source text concurrently.  The lexer thread is
    cancelled and joined before this returns, whether parsing succeeded or
    not.
    """
    acc = Accumulator()
    with Lexer(text) as lexer:
        model = Parser(lexer, acc).parse()
    return model


def generate(proto: IO, out: IO, config: Optional[GeneratorConfig] = None,
             source: str = "") -> Generator:
    """
    Read a protocol description from ``proto`` and write Go constants to
    ``out``.

    Undecodable input and any lexical, syntax, literal, template or write
    error abort the run and propagate to the caller.  Returns the rendered
    symbol model.
    """
    config = config or GeneratorConfig()

    text = proto.read()
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InputError(
                f"input is not valid UTF-8: byte 0x{text[e.start]:02x} "
                f"at offset {e.start}", e.start) from e

    model = parse_protocol(text)
    logger.info("found %d enums and %d consts",
                len(model.enums), len(model.consts))

    transform_names(model)
    template = load_template(config.template_dir)
    render(model, out, template, package=config.package, source=source)
    return model
