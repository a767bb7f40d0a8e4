"""
OscTree - one node type for OSC arguments, messages and bundles.

An OscTree node is exactly one of:
    - empty root:  no type tag, no address, no time tag
    - argument:    a typed leaf holding the wire payload of one value
    - message:     an address plus ordered argument children
    - bundle:      a time tag plus ordered message/bundle children

Example usage:
    message = OscTree.make_message("/foo/bar/baz")
    message.push_back(OscTree.int32(4096))
    message.push_back(OscTree.string("Hello, OSC"))
    data = message.to_bytes()

    decoded = OscTree(data)
    decoded.address                       # "/foo/bar/baz"
    decoded.children[0].get_value()       # 4096
    decoded.children[1].get_value()       # "Hello, OSC"
"""

import struct
import weakref

import numpy as np

from ..errors import SizeLimitExceeded, StructureError, TypeMismatch
from ..utils.timetag import TimeTag, coerce_time_tag
from .arg_type import ArgType, DEFAULT_TYPE_TAGS, STRUCT_FORMATS, TAG_TO_ARG_TYPE

# Blob lengths travel in a signed 32-bit field
MAX_BLOB_SIZE = 2 ** 31 - 1


def _check_type_tag(type_tag):
    """Normalize a type tag given as a 1-char str or a byte value."""
    if isinstance(type_tag, int) and not isinstance(type_tag, bool):
        type_tag = chr(type_tag)
    if not isinstance(type_tag, str) or len(type_tag) != 1:
        raise ValueError(f"type tag must be a single character, got {type_tag!r}")
    if not 0 < ord(type_tag) < 128 or type_tag == ",":
        raise ValueError(f"invalid type tag {type_tag!r}")
    return type_tag


def _pack(arg_type, value):
    try:
        return struct.pack(STRUCT_FORMATS[arg_type], value)
    except (struct.error, OverflowError) as e:
        raise ValueError(f"{value!r} cannot be stored as {arg_type.value}: {e}") from e


class OscTree:
    """
    A node of an OSC packet tree.

    Construct an empty node with OscTree(), decode a packet with
    OscTree(buffer), build arguments with the typed class methods and
    assemble messages and bundles with make_message(), make_bundle() and
    push_back().

    Children are owned by value: push_back() stores a copy, so later changes
    to the node passed in do not affect the tree.
    """

    def __init__(self, buffer=None):
        """
        Create an empty node, or decode one OSC packet.

        Args:
            buffer: Optional bytes-like OSC packet (message or bundle)

        Raises:
            DecodeError: If buffer is not a well-formed OSC packet
        """
        self._children = []
        self._value = b""
        self._address = None
        self._time_tag = None
        self._type_tag = None
        self._arg_type = None
        self._blob_size = 0
        self._parent = None
        if buffer is not None:
            from ..codec.osc_reader import OscReader
            OscReader(buffer).read_packet(self)

    @classmethod
    def from_bytes(cls, buffer):
        """Decode an OSC packet; same as OscTree(buffer)."""
        return cls(buffer)

    # ------------------------------------------------------------------
    # Argument constructors
    # ------------------------------------------------------------------

    @classmethod
    def argument(cls, arg_type, value, type_tag=None):
        """
        Build an argument from its already encoded payload.

        Args:
            arg_type: ArgType describing the payload
            value: Unpadded wire bytes (strings include their NUL,
                blobs exclude their length prefix)
            type_tag: Tag written to the type-tag string (defaults per type)
        """
        arg_type = ArgType(arg_type)
        if type_tag is None:
            type_tag = DEFAULT_TYPE_TAGS.get(arg_type)
            if type_tag is None:
                raise ValueError(f"{arg_type.value} arguments need an explicit type tag")
        value = bytes(value)
        if arg_type is ArgType.BLOB and len(value) >= MAX_BLOB_SIZE:
            raise SizeLimitExceeded(len(value), MAX_BLOB_SIZE)
        node = cls()
        node._arg_type = arg_type
        node._type_tag = _check_type_tag(type_tag)
        node._value = value
        if arg_type is ArgType.BLOB:
            node._blob_size = len(value)
        return node

    @classmethod
    def int32(cls, value, type_tag="i"):
        """32-bit signed integer argument."""
        return cls.argument(ArgType.INT32, _pack(ArgType.INT32, value), type_tag)

    @classmethod
    def float32(cls, value, type_tag="f"):
        """32-bit IEEE 754 float argument."""
        return cls.argument(ArgType.FLOAT32, _pack(ArgType.FLOAT32, value), type_tag)

    @classmethod
    def int64(cls, value, type_tag="h"):
        """64-bit signed integer argument."""
        return cls.argument(ArgType.INT64, _pack(ArgType.INT64, value), type_tag)

    @classmethod
    def float64(cls, value, type_tag="d"):
        """64-bit IEEE 754 double argument."""
        return cls.argument(ArgType.FLOAT64, _pack(ArgType.FLOAT64, value), type_tag)

    @classmethod
    def string(cls, value, type_tag="s"):
        """
        UTF-8 string argument.

        The stored value is the encoded text plus one NUL terminator.
        Alignment padding is added when the tree is encoded.
        """
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        data = value.encode("utf-8")
        if b"\x00" in data:
            raise ValueError("OSC strings cannot contain NUL characters")
        return cls.argument(ArgType.STRING, data + b"\x00", type_tag)

    @classmethod
    def blob(cls, data, type_tag="b"):
        """
        Blob argument holding arbitrary bytes.

        Raises:
            SizeLimitExceeded: If the data is 2**31 - 1 bytes or longer
        """
        size = memoryview(data).nbytes
        if size >= MAX_BLOB_SIZE:
            raise SizeLimitExceeded(size, MAX_BLOB_SIZE)
        return cls.argument(ArgType.BLOB, data, type_tag)

    @classmethod
    def from_array(cls, array, type_tag="b"):
        """
        Blob argument holding the raw bytes of a NumPy array.

        The receiver needs to know the dtype (including byte order) and
        shape to rebuild the array with as_array().
        """
        array = np.ascontiguousarray(array)
        if array.nbytes >= MAX_BLOB_SIZE:
            raise SizeLimitExceeded(array.nbytes, MAX_BLOB_SIZE)
        return cls.argument(ArgType.BLOB, array.tobytes(), type_tag)

    @classmethod
    def boolean(cls, value):
        """True/False argument, carried entirely by the 'T' or 'F' tag."""
        return cls.argument(ArgType.BOOL, b"", "T" if value else "F")

    @classmethod
    def timetag(cls, value=None, type_tag="t"):
        """
        Time tag argument.

        Args:
            value: TimeTag, raw 64-bit int, datetime, or None for now
        """
        return cls.argument(ArgType.TIME_TAG, coerce_time_tag(value).to_bytes(), type_tag)

    @classmethod
    def tag(cls, type_tag):
        """Argument with no payload, e.g. 'N' (nil), 'I' (impulse) or a custom tag."""
        type_tag = _check_type_tag(type_tag)
        if type_tag in TAG_TO_ARG_TYPE and type_tag not in "TFNI":
            raise ValueError(f"type tag '{type_tag}' carries a payload; use its typed constructor")
        arg_type = ArgType.BOOL if type_tag in "TF" else ArgType.EMPTY
        return cls.argument(arg_type, b"", type_tag)

    # ------------------------------------------------------------------
    # Messages and bundles
    # ------------------------------------------------------------------

    @classmethod
    def make_message(cls, address):
        """Create a message root with the given address and no arguments."""
        node = cls()
        node.set_address(address)
        return node

    @classmethod
    def make_bundle(cls, time_tag=None):
        """Create a bundle root; time_tag defaults to the current time."""
        node = cls()
        node.set_time_tag(time_tag)
        return node

    def set_address(self, address):
        """Make this node a message with the given address."""
        if self.is_argument:
            raise StructureError("an argument cannot have an address")
        if not isinstance(address, str):
            raise TypeError(f"address must be a str, got {type(address).__name__}")
        if "\x00" in address:
            raise ValueError("OSC addresses cannot contain NUL characters")
        if any(not child.is_argument for child in self._children):
            raise StructureError("a message can only contain arguments")
        self._address = address
        self._time_tag = None

    def set_time_tag(self, time_tag=None):
        """Make this node a bundle scheduled at time_tag (None means now)."""
        if self.is_argument:
            raise StructureError("an argument cannot have a time tag")
        if any(child.is_argument for child in self._children):
            raise StructureError("a bundle can only contain messages and bundles")
        self._time_tag = coerce_time_tag(time_tag)
        self._address = None

    def push_back(self, child):
        """
        Append a copy of child.

        Returns:
            self, so calls can be chained

        Raises:
            StructureError: If child cannot be placed under this node
        """
        if not isinstance(child, OscTree):
            raise TypeError(f"expected OscTree, got {type(child).__name__}")
        if self.is_argument:
            raise StructureError(f"argument '{self._type_tag}' cannot have children")
        if self.is_message and not child.is_argument:
            raise StructureError("a message can only contain arguments")
        if self.is_bundle and child.is_argument:
            raise StructureError("a bundle can only contain messages and bundles")
        self._append(child._clone())
        return self

    def _append(self, child):
        child._parent = weakref.ref(self)
        self._children.append(child)

    def _clone(self):
        node = type(self)()
        node._value = self._value
        node._address = self._address
        node._time_tag = self._time_tag
        node._type_tag = self._type_tag
        node._arg_type = self._arg_type
        node._blob_size = self._blob_size
        for child in self._children:
            node._append(child._clone())
        return node

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def children(self):
        """Child nodes in order, as a tuple."""
        return tuple(self._children)

    def has_children(self):
        return bool(self._children)

    def __iter__(self):
        return iter(self._children)

    @property
    def parent(self):
        """The node this one was appended to, or None."""
        if self._parent is None:
            return None
        return self._parent()

    def has_parent(self):
        return self.parent is not None

    @property
    def value(self):
        """Raw, unpadded wire payload of an argument (b"" otherwise)."""
        return self._value

    @property
    def type_tag(self):
        return self._type_tag

    @property
    def arg_type(self):
        return self._arg_type

    @property
    def blob_size(self):
        """Declared length of a blob argument (0 for other nodes)."""
        return self._blob_size

    @property
    def address(self):
        return self._address

    @property
    def time_tag(self):
        return self._time_tag

    @property
    def is_argument(self):
        return self._type_tag is not None

    @property
    def is_message(self):
        return self._address is not None

    @property
    def is_bundle(self):
        return self._time_tag is not None

    def get_value(self, arg_type=None):
        """
        Rebuild the Python value of an argument.

        Args:
            arg_type: Expected ArgType (or its name such as "int32").
                If given and different from the stored type, the read fails.

        Returns:
            int, float, str, bytes, bool, TimeTag, or None for payload-free tags

        Raises:
            TypeMismatch: If this node is not an argument or holds another type
        """
        if self._arg_type is None:
            raise TypeMismatch("only argument nodes carry a value")
        if arg_type is not None:
            try:
                arg_type = ArgType(arg_type)
            except ValueError:
                raise TypeMismatch(f"unknown argument type {arg_type!r}") from None
            if arg_type is not self._arg_type:
                raise TypeMismatch(
                    f"argument '{self._type_tag}' holds {self._arg_type.value}, "
                    f"not {arg_type.value}"
                )
        kind = self._arg_type
        if kind in STRUCT_FORMATS:
            return struct.unpack(STRUCT_FORMATS[kind], self._value)[0]
        if kind is ArgType.STRING:
            return self._value[:-1].decode("utf-8", errors="replace")
        if kind is ArgType.BLOB:
            return self._value
        if kind is ArgType.BOOL:
            return self._type_tag == "T"
        if kind is ArgType.TIME_TAG:
            return TimeTag.from_bytes(self._value)
        return None

    def as_array(self, dtype, shape=None):
        """
        Interpret a blob argument as a NumPy array.

        Args:
            dtype: NumPy dtype of the elements, e.g. ">f8" or np.int32
            shape: Optional shape to reshape the flat array to

        Returns:
            A new, writable ndarray
        """
        array = np.frombuffer(self.get_value(ArgType.BLOB), dtype=dtype)
        if shape is not None:
            array = array.reshape(shape)
        return array.copy()

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def to_bytes(self):
        """
        Encode the tree as an OSC packet.

        Returns:
            bytes whose length is a multiple of 4

        Raises:
            StructureError: If the tree has no valid message/bundle shape
        """
        from ..codec.osc_writer import OscWriter
        return OscWriter().write(self)

    def __bytes__(self):
        return self.to_bytes()

    def __eq__(self, other):
        if not isinstance(other, OscTree):
            return NotImplemented
        return (
            self._type_tag == other._type_tag
            and self._arg_type == other._arg_type
            and self._value == other._value
            and self._address == other._address
            and self._time_tag == other._time_tag
            and self._children == other._children
        )

    __hash__ = None

    def __repr__(self):
        if self.is_argument:
            return f"OscTree('{self._type_tag}', {self.get_value()!r})"
        if self.is_message:
            tags = "".join(child.type_tag for child in self._children)
            return f"OscTree(message {self._address!r} ,{tags})"
        if self.is_bundle:
            return f"OscTree(bundle {int(self._time_tag):#018x}, {len(self._children)} elements)"
        return f"OscTree(empty, {len(self._children)} children)"
