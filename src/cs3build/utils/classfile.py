"""Minimal JVM class file reader.

Only the pieces needed to identify a class are decoded: the constant pool,
``this_class`` and the class-level annotation attributes. Fields, methods and
all other attributes are skipped by length.
"""

import struct
from dataclasses import dataclass, field

from cs3build.exceptions import ClassFormatError

CLASS_MAGIC = 0xCAFEBABE

VISIBLE_ANNOTATIONS = "RuntimeVisibleAnnotations"
INVISIBLE_ANNOTATIONS = "RuntimeInvisibleAnnotations"

# Constant pool tags
_UTF8 = 1
_CLASS = 7
_LONG = 5
_DOUBLE = 6

# Payload size (bytes) of every fixed-size constant pool entry
_CONSTANT_SIZES: dict[int, int] = {
    3: 4,  # Integer
    4: 4,  # Float
    _LONG: 8,
    _DOUBLE: 8,
    _CLASS: 2,
    8: 2,  # String
    9: 4,  # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}

# element_value tags carrying a single constant pool index
_CONST_VALUE_TAGS = frozenset(b"BCDFIJSZsc")


@dataclass(frozen=True)
class ClassInfo:
    """Identity and annotations of a compiled class."""

    internal_name: str
    """Binary name with slashes, e.g. ``com/example/MyPlugin``."""

    visible_annotations: tuple[str, ...] = field(default=())
    """Descriptors from RuntimeVisibleAnnotations."""

    invisible_annotations: tuple[str, ...] = field(default=())
    """Descriptors from RuntimeInvisibleAnnotations."""

    @property
    def name(self) -> str:
        """Fully-qualified dotted class name."""
        return self.internal_name.replace("/", ".")

    @property
    def annotations(self) -> frozenset[str]:
        """All class-level annotation descriptors, regardless of retention."""
        return frozenset(self.visible_annotations + self.invisible_annotations)


class _Reader:
    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def u1(self) -> int:
        (value,) = struct.unpack_from(">B", self.data, self.offset)
        self.offset += 1
        return value

    def u2(self) -> int:
        (value,) = struct.unpack_from(">H", self.data, self.offset)
        self.offset += 2
        return value

    def u4(self) -> int:
        (value,) = struct.unpack_from(">I", self.data, self.offset)
        self.offset += 4
        return value

    def take(self, length: int) -> bytes:
        end = self.offset + length
        if end > len(self.data):
            raise struct.error(f"need {length} bytes at offset {self.offset}")
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def skip(self, length: int) -> None:
        self.take(length)


def decode_modified_utf8(raw: bytes) -> str:
    """Decode a JVM modified UTF-8 string.

    NUL is stored as C0 80 and supplementary characters as surrogate pairs
    of three bytes each.

    Raises:
        ClassFormatError: If the bytes are not valid modified UTF-8.
    """
    try:
        text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
        return text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeError as e:
        raise ClassFormatError(f"Invalid modified UTF-8 constant: {raw!r}") from e


class _ConstantPool:
    def __init__(self) -> None:
        self.utf8: dict[int, str] = {}
        self.classes: dict[int, int] = {}

    def utf8_at(self, index: int) -> str:
        try:
            return self.utf8[index]
        except KeyError:
            raise ClassFormatError(f"Constant #{index} is not a Utf8 entry") from None

    def class_name_at(self, index: int) -> str:
        try:
            name_index = self.classes[index]
        except KeyError:
            raise ClassFormatError(f"Constant #{index} is not a Class entry") from None
        return self.utf8_at(name_index)


def _read_constant_pool(reader: _Reader) -> _ConstantPool:
    count = reader.u2()
    pool = _ConstantPool()
    index = 1
    while index < count:
        tag = reader.u1()
        if tag == _UTF8:
            length = reader.u2()
            pool.utf8[index] = decode_modified_utf8(reader.take(length))
        elif tag == _CLASS:
            pool.classes[index] = reader.u2()
        elif tag in _CONSTANT_SIZES:
            reader.skip(_CONSTANT_SIZES[tag])
        else:
            raise ClassFormatError(f"Unknown constant pool tag {tag} at #{index}")
        # Long and Double occupy two slots
        index += 2 if tag in (_LONG, _DOUBLE) else 1
    return pool


def _skip_attributes(reader: _Reader) -> None:
    for _ in range(reader.u2()):
        reader.u2()
        reader.skip(reader.u4())


def _skip_members(reader: _Reader) -> None:
    for _ in range(reader.u2()):
        reader.skip(6)  # access_flags, name_index, descriptor_index
        _skip_attributes(reader)


def _skip_element_value(reader: _Reader) -> None:
    tag = reader.u1()
    if tag in _CONST_VALUE_TAGS:
        reader.skip(2)
    elif tag == ord("e"):
        reader.skip(4)
    elif tag == ord("@"):
        _read_annotation(reader)
    elif tag == ord("["):
        for _ in range(reader.u2()):
            _skip_element_value(reader)
    else:
        raise ClassFormatError(f"Unknown annotation element tag {chr(tag)!r}")


def _read_annotation(reader: _Reader) -> int:
    type_index = reader.u2()
    for _ in range(reader.u2()):
        reader.skip(2)  # element_name_index
        _skip_element_value(reader)
    return type_index


def _read_annotation_types(reader: _Reader, pool: _ConstantPool) -> tuple[str, ...]:
    return tuple(pool.utf8_at(_read_annotation(reader)) for _ in range(reader.u2()))


def read_class_info(data: bytes) -> ClassInfo:
    """Parse a class file and return its name and class-level annotations.

    Args:
        data: Raw class file bytes.

    Returns:
        ClassInfo for the class.

    Raises:
        ClassFormatError: If the bytes are not a well-formed class file.
    """
    reader = _Reader(data)
    try:
        if reader.u4() != CLASS_MAGIC:
            raise ClassFormatError("Not a class file (bad magic number)")
        reader.skip(4)  # minor_version, major_version

        pool = _read_constant_pool(reader)
        reader.skip(2)  # access_flags
        internal_name = pool.class_name_at(reader.u2())
        reader.skip(2)  # super_class
        reader.skip(2 * reader.u2())  # interfaces
        _skip_members(reader)  # fields
        _skip_members(reader)  # methods

        visible: tuple[str, ...] = ()
        invisible: tuple[str, ...] = ()
        for _ in range(reader.u2()):
            attr_name = pool.utf8_at(reader.u2())
            length = reader.u4()
            if attr_name == VISIBLE_ANNOTATIONS:
                visible += _read_annotation_types(_Reader(reader.take(length)), pool)
            elif attr_name == INVISIBLE_ANNOTATIONS:
                invisible += _read_annotation_types(_Reader(reader.take(length)), pool)
            else:
                reader.skip(length)
    except struct.error as e:
        raise ClassFormatError(f"Truncated class file: {e}") from e

    return ClassInfo(
        internal_name=internal_name,
        visible_annotations=visible,
        invisible_annotations=invisible,
    )
