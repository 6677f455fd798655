"""
Emitter: renders the collected symbols as Go source through a jinja2 template.
"""

import io
import logging
import os
from typing import IO, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from .names import const_name_transform
from .symbols import Generator

logger = logging.getLogger(__name__)

# Logical name of the output template.
TEMPLATE_NAME = "constants.tmpl"

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

DEFAULT_PACKAGE = "constants"


def transform_names(model: Generator):
    """
    Rewrite every enum and const name into its Go form, in place.

    Must run exactly once per model, after parsing has finished.
    """
    for item in model.enums:
        item.name = const_name_transform(item.name)
    for item in model.consts:
        item.name = const_name_transform(item.name)


def load_template(template_dir: Optional[str] = None) -> Template:
    """
    Load the constants template.  Missing or malformed templates raise
    jinja2's TemplateNotFound / TemplateSyntaxError.
    """
    template_dir = template_dir or TEMPLATE_DIR
    env = Environment(
        loader=FileSystemLoader(template_dir),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    logger.debug("loading %s from %s", TEMPLATE_NAME, template_dir)
    return env.get_template(TEMPLATE_NAME)


def render(model: Generator, out: IO, template: Template,
           package: str = DEFAULT_PACKAGE, source: str = ""):
    """
    Render ``model`` with ``template`` and write the result to ``out`` in a
    single write.  Binary streams receive UTF-8.
    """
    text = template.render(
        enums=model.enums,
        consts=model.consts,
        package=package,
        source=source,
    )
    if isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
        out.write(text.encode("utf-8"))
    else:
        out.write(text)
    logger.debug("rendered %d enums and %d consts",
                 len(model.enums), len(model.consts))
