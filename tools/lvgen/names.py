"""
Name transformation: protocol identifiers → Go identifiers.

``REMOTE_PROTOCOL_VERSION`` becomes ``ProtocolVersion`` and
``REMOTE_DOMAIN_GET_XML`` becomes ``DomainGetXML``.
"""

# Namespace prefix shared by the remote protocol's symbols.
REMOTE_PREFIX = "REMOTE_"

# Abbreviations which should be all upper-case in a name, in scan order.
ABBREVIATIONS = ("Xml", "Io", "Uuid", "Cpu", "Id", "Ip")


def const_name_transform(name: str) -> str:
    """
    Turn an upper-cased, snake-style name into a Go name: drop the
    ``REMOTE_`` prefix, camel-case the rest and upper-case abbreviations.
    """
    if name.startswith(REMOTE_PREFIX):
        name = name[len(REMOTE_PREFIX):]
    return fix_abbrevs(snake_to_camel(name))


def snake_to_camel(s: str) -> str:
    """
    Camel-case a snake-style string.  The first character and every character
    after an underscore are upper-cased, all others lower-cased, and the
    underscores are dropped.

    ex: "PROC_DOMAIN_GET_METADATA" -> "ProcDomainGetMetadata"
    """
    out = []
    hump = True
    for c in s:
        if c == "_":
            hump = True
            continue
        out.append(c.upper() if hump else c.lower())
        hump = False
    return "".join(out)


def fix_abbrevs(s: str) -> str:
    """
    Upper-case every abbreviation in ``ABBREVIATIONS`` that ends a word.

    A match followed by a lower-case character is part of a longer word
    ("Idle", "Iothread") and is left alone; a match at the end of the string
    or followed by anything else is upper-cased.
    """
    for abbrev in ABBREVIATIONS:
        upper = abbrev.upper()
        loc = s.find(abbrev)
        while loc != -1:
            end = loc + len(abbrev)
            nxt = s[end:end + 1]
            if not nxt or not nxt.islower():
                s = s[:loc] + upper + s[end:]
            loc = s.find(abbrev, loc + 1)
    return s
