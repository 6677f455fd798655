"""
lvgen: constant-binding generator for rpcgen-style protocol files.

Tokenizes and parses an XDR protocol description (``remote_protocol.x`` and
friends), collects every ``const`` and ``enum`` value it declares, and renders
them as Go constants through a jinja2 template.
"""
