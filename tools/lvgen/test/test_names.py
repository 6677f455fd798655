"""Tests for protocol name → Go name transformation."""

import pytest

from tools.lvgen.names import (
    ABBREVIATIONS,
    const_name_transform,
    fix_abbrevs,
    snake_to_camel,
)


class TestSnakeToCamel:
    def test_example(self):
        assert snake_to_camel("PROC_DOMAIN_GET_METADATA") == "ProcDomainGetMetadata"

    def test_lower_input(self):
        assert snake_to_camel("remote_auth_type") == "RemoteAuthType"

    def test_leading_and_double_underscores(self):
        assert snake_to_camel("__A__B") == "AB"

    def test_digits(self):
        assert snake_to_camel("VIR_UUID_BUFLEN_2") == "VirUuidBuflen2"

    def test_empty(self):
        assert snake_to_camel("") == ""


class TestFixAbbrevs:
    def test_at_end(self):
        assert fix_abbrevs("DomainGetXml") == "DomainGetXML"

    def test_before_new_word(self):
        assert fix_abbrevs("DomainGetXmlDesc") == "DomainGetXMLDesc"

    def test_inside_word_untouched(self):
        assert fix_abbrevs("Idle") == "Idle"
        assert fix_abbrevs("DomainIothreadInfo") == "DomainIothreadInfo"

    def test_before_digit(self):
        assert fix_abbrevs("Ip4Addr") == "IP4Addr"

    def test_multiple_occurrences(self):
        assert fix_abbrevs("CpuIdCpu") == "CPUIDCPU"

    def test_rejected_then_accepted(self):
        assert fix_abbrevs("IdleId") == "IdleID"

    def test_uuid_before_id(self):
        assert fix_abbrevs("DomainLookupByUuid") == "DomainLookupByUUID"

    def test_table_order(self):
        assert ABBREVIATIONS == ("Xml", "Io", "Uuid", "Cpu", "Id", "Ip")


class TestConstNameTransform:
    @pytest.mark.parametrize("name, expected", [
        ("REMOTE_PROTOCOL_VERSION", "ProtocolVersion"),
        ("REMOTE_DOMAIN_GET_XML", "DomainGetXML"),
        ("REMOTE_DOMAIN_GET_XML_DESC", "DomainGetXMLDesc"),
        ("REMOTE_DOMAIN_GET_XMLDESC", "DomainGetXmldesc"),
        ("REMOTE_PROC_DOMAIN_GET_METADATA", "ProcDomainGetMetadata"),
        ("REMOTE_PROC_NODE_GET_CPU_STATS", "ProcNodeGetCPUStats"),
        ("REMOTE_PROC_DOMAIN_GET_ID", "ProcDomainGetID"),
        ("REMOTE_UUID_BUFLEN", "UUIDBuflen"),
        ("REMOTE_DOMAIN_IOTHREAD_INFO", "DomainIothreadInfo"),
        ("REMOTE_DOMAIN_BLOCK_IO_TUNE", "DomainBlockIOTune"),
        ("REMOTE_NODE_IP", "NodeIP"),
        ("IDLE", "Idle"),
        ("VIR_DOMAIN_IDLE_ID", "VirDomainIdleID"),
    ])
    def test_transform(self, name, expected):
        assert const_name_transform(name) == expected

    def test_prefix_only_stripped_at_start(self):
        assert const_name_transform("AUTH_REMOTE_FOO") == "AuthRemoteFoo"

    def test_prefix_stripped_once(self):
        assert const_name_transform("REMOTE_REMOTE_FOO") == "RemoteFoo"

    def test_no_prefix(self):
        assert const_name_transform("FOO") == "Foo"

    def test_deterministic(self):
        name = "REMOTE_PROC_CONNECT_GET_CPU_MODEL_NAMES"
        assert const_name_transform(name) == const_name_transform(name)
