"""Shared fixtures for lvgen tests."""

import pytest
import sys
import os

# Add the project root to sys.path so 'tools.lvgen' is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from tools.lvgen.lexer import tokenize
from tools.lvgen.parser import Parser


# A trimmed-down remote_protocol.x covering every grammar production.
REMOTE_PROTOCOL = """\
/* -*- c -*-
 * remote_protocol.x: private protocol for communicating between
 * remote_internal driver and libvirtd.
 */

%#include <libvirt/libvirt.h>
%#include "internal.h"

const REMOTE_MESSAGE_MAX = 4194304;
const REMOTE_STRING_MAX = 4194304;
const REMOTE_DOMAIN_LIST_MAX = 0x4000;
const REMOTE_UUID_BUFLEN = 16;

typedef string remote_nonnull_string<REMOTE_STRING_MAX>;
typedef remote_nonnull_string *remote_string;
typedef opaque remote_uuid[VIR_UUID_BUFLEN];

struct remote_nonnull_domain {
    remote_nonnull_string name;
    remote_uuid uuid;
    int id;
};

enum remote_auth_type {
    REMOTE_AUTH_NONE = 0,
    REMOTE_AUTH_SASL = 1,
    REMOTE_AUTH_POLKIT = 2
};

union remote_typed_param_value switch (int type) {
 case VIR_TYPED_PARAM_INT:
     int i;
 case VIR_TYPED_PARAM_UINT:
     unsigned int ui;
 case VIR_TYPED_PARAM_LLONG:
 case VIR_TYPED_PARAM_ULLONG:
     unsigned hyper ul;
 default:
     void;
};

struct remote_domain_get_xml_desc_args {
    remote_nonnull_domain dom;
    unsigned int flags;
};

struct remote_domain_get_xml_desc_ret {
    remote_nonnull_string xml;
};

const REMOTE_PROGRAM = 0x20008086;
const REMOTE_PROTOCOL_VERSION = 1;

enum remote_procedure {
    REMOTE_PROC_CONNECT_OPEN = 1,
    REMOTE_PROC_CONNECT_CLOSE,
    REMOTE_PROC_DOMAIN_GET_XML_DESC = 14,
    REMOTE_PROC_DOMAIN_GET_ID,
    REMOTE_PROC_NODE_GET_CPU_STATS
};

program REMOTE {
    version V1 {
        void CONNECT_CLOSE(void) = 2;
        remote_domain_get_xml_desc_ret DOMAIN_GET_XML_DESC(remote_domain_get_xml_desc_args) = 14;
    } = 1;
} = 0x20008086;
"""


@pytest.fixture
def remote_protocol():
    """Source text of the sample protocol."""
    return REMOTE_PROTOCOL


@pytest.fixture
def remote_model():
    """Symbols parsed from the sample protocol."""
    return Parser(tokenize(REMOTE_PROTOCOL)).parse()
