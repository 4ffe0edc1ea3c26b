"""Tests for the class registry and the archive header / tag protocol."""

import pytest

from sfctools.parsers import ClassRegistry, DecodeContext
from sfctools.parsers.archive import (
    ArchiveHeader,
    ClassTag,
    derive_object_tag,
    read_archive_header,
    read_header_or_tag,
)
from sfctools.parsers.errors import InvalidArchiveTag, StructuralUnderrun, UnexpectedClassName

from sfc_builders import archive_header, u16, u32


def test_registry_membership():
    registry = ClassRegistry()
    assert not registry.contains("CRoom")
    registry.register("CRoom")
    assert registry.contains("CRoom")
    assert "CRoom" in registry
    assert not registry.contains("CDoor")


def test_registry_register_is_idempotent():
    registry = ClassRegistry()
    registry.register("CDoor")
    registry.register("CDoor")
    assert len(registry) == 1


def test_contexts_do_not_share_registries():
    first, second = DecodeContext(), DecodeContext()
    first.registry.register("CRoom")
    assert not second.registry.contains("CRoom")


def test_context_rejects_ceiling_above_2000():
    with pytest.raises(ValueError):
        DecodeContext(max_count=2001)


def test_derive_object_tag_moves_class_bit_to_bit_31():
    assert derive_object_tag(0xFFFF) == 0x80007FFF
    assert derive_object_tag(0x8001) == 0x80000001
    assert derive_object_tag(0x0001) == 0x00000001


def test_read_archive_header():
    data = archive_header("CRoom", schema=3)
    header, offset = read_archive_header(data, 0)
    assert header == ArchiveHeader(tag=0xFFFF, object_tag=0x80007FFF, schema=3, class_name="CRoom")
    assert offset == len(data)


def test_read_archive_header_skips_zero_padding():
    data = archive_header("CDoor", padding=3)
    header, offset = read_archive_header(data, 0)
    assert header.class_name == "CDoor"
    assert offset == len(data)


def test_read_archive_header_big_object_tag():
    data = archive_header("Object", tag=0x7FFF, object_tag=0x80000123)
    header, offset = read_archive_header(data, 0)
    assert header.tag == 0x7FFF
    assert header.object_tag == 0x80000123
    assert header.class_name == "Object"
    assert offset == len(data)


def test_read_archive_header_big_object_tag_without_marker():
    data = archive_header("Object", tag=0x7FFF, object_tag=0x00000123)
    with pytest.raises(InvalidArchiveTag) as exc_info:
        read_archive_header(data, 0)
    assert exc_info.value.object_tag == 0x123
    assert exc_info.value.offset == 0


def test_read_archive_header_short_tag_without_marker():
    data = u16(0x0005) + u16(1) + u16(5) + b'CRoom'
    with pytest.raises(InvalidArchiveTag):
        read_archive_header(data, 0)


def test_read_archive_header_all_padding_underruns():
    with pytest.raises(StructuralUnderrun):
        read_archive_header(b'\x00' * 8, 0)


def test_header_branch_registers_class(ctx):
    data = archive_header("CGallery")
    header_or_tag, offset = read_header_or_tag(data, 0, ctx, "CGallery")
    assert isinstance(header_or_tag, ArchiveHeader)
    assert header_or_tag.class_name == "CGallery"
    assert offset == len(data)
    assert ctx.registry.contains("CGallery")


def test_tag_branch_reads_two_bytes(ctx):
    ctx.registry.register("CGallery")
    data = u16(0x8003) + u32(0xDEADBEEF)
    header_or_tag, offset = read_header_or_tag(data, 0, ctx, "CGallery")
    assert header_or_tag == ClassTag(tag=0x8003)
    assert offset == 2


def test_header_then_tag(ctx):
    data = archive_header("CDoor") + u16(0x8001)
    first, offset = read_header_or_tag(data, 0, ctx, "CDoor")
    second, offset = read_header_or_tag(data, offset, ctx, "CDoor")
    assert isinstance(first, ArchiveHeader)
    assert isinstance(second, ClassTag)
    assert offset == len(data)


def test_unexpected_class_name(ctx):
    data = archive_header("CDoor")
    with pytest.raises(UnexpectedClassName) as exc_info:
        read_header_or_tag(data, 0, ctx, "CRoom")
    err = exc_info.value
    assert err.expected == "CRoom"
    assert err.actual == "CDoor"
    assert not ctx.registry.contains("CRoom")
    assert not ctx.registry.contains("CDoor")


def test_record_scope_stamps_innermost_path(ctx):
    with pytest.raises(UnexpectedClassName) as exc_info:
        with ctx.record("Document"):
            with ctx.record("CRoom", 2):
                read_header_or_tag(archive_header("CDoor"), 0, ctx, "CRoom")
    assert exc_info.value.record_path == "Document/CRoom[2]"
    assert "Document/CRoom[2]" in str(exc_info.value)
    assert ctx.path == []
