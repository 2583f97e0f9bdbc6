"""ACPI table parsing and the PM-timer based busy wait."""

from __future__ import annotations

import logging
import struct
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

_log = logging.getLogger(__name__)

PM_TIMER_FREQ = 3579545

_RSDP_FORMAT = "<8sB6sBIIQB3s"
_RSDP_SIZE = struct.calcsize(_RSDP_FORMAT)
_HEADER_FORMAT = "<4sIBB6s8sIII"
HEADER_SIZE = struct.calcsize(_HEADER_FORMAT)
_FADT_PM_TMR_BLK_OFFSET = 76
_FADT_FLAGS_OFFSET = 112


class AcpiError(Exception):
    """An ACPI table is missing, truncated or invalid."""


def sum_bytes(data) -> int:
    """Sum of the bytes of ``data`` modulo 256."""
    return sum(bytes(data)) & 0xFF


@dataclass
class RSDP:
    """The Root System Description Pointer."""

    signature: bytes
    checksum: int
    oem_id: bytes
    revision: int
    rsdt_address: int
    length: int
    xsdt_address: int
    extended_checksum: int
    reserved: bytes
    raw: bytes = field(default=b"", repr=False, compare=False)

    @classmethod
    def from_bytes(cls, data) -> RSDP:
        """Parse an RSDP from the first 36 bytes of ``data``."""
        raw = bytes(data[:_RSDP_SIZE])
        if len(raw) < _RSDP_SIZE:
            raise AcpiError("RSDP is truncated")
        return cls(*struct.unpack(_RSDP_FORMAT, raw), raw=raw)

    def is_valid(self) -> bool:
        """Check signature, revision and both checksums."""
        if self.signature != b"RSD PTR ":
            _log.debug("invalid signature: %r", self.signature)
            return False
        if self.revision != 2:
            _log.debug("ACPI revision must be 2: %d", self.revision)
            return False
        total = sum_bytes(self.raw[:20])
        if total != 0:
            _log.debug("sum of 20 bytes must be 0: %d", total)
            return False
        total = sum_bytes(self.raw[:36])
        if total != 0:
            _log.debug("sum of 36 bytes must be 0: %d", total)
            return False
        return True


@dataclass
class DescriptionHeader:
    """The common header of every system description table."""

    signature: bytes
    length: int
    revision: int
    checksum: int
    oem_id: bytes
    oem_table_id: bytes
    oem_revision: int
    creator_id: int
    creator_revision: int
    raw: bytes = field(default=b"", repr=False, compare=False)
    address: int | None = field(default=None, compare=False)

    @classmethod
    def from_bytes(cls, data) -> DescriptionHeader:
        """Parse a header; the whole table (``length`` bytes) is kept for checksums."""
        head = bytes(data[:HEADER_SIZE])
        if len(head) < HEADER_SIZE:
            raise AcpiError("description header is truncated")
        values = struct.unpack(_HEADER_FORMAT, head)
        length = values[1]
        return cls(*values, raw=bytes(data[:length]))

    def is_valid(self, expected_signature) -> bool:
        """Check the signature and that the table's bytes sum to zero."""
        expected = (
            expected_signature.encode("ascii")
            if isinstance(expected_signature, str)
            else bytes(expected_signature)
        )
        if self.signature != expected[:4]:
            _log.debug("invalid signature: %r", self.signature)
            return False
        if len(self.raw) < self.length:
            _log.debug("table of %u bytes is truncated", self.length)
            return False
        total = sum_bytes(self.raw)
        if total != 0:
            _log.debug("sum of %u bytes must be 0: %d", self.length, total)
            return False
        return True


def _header_at(memory, address: int) -> DescriptionHeader:
    header = DescriptionHeader.from_bytes(memory[address:])
    header.address = address
    return header


@dataclass
class FADT:
    """The Fixed ACPI Description Table (only the fields used here)."""

    header: DescriptionHeader
    pm_tmr_blk: int
    flags: int

    @classmethod
    def from_bytes(cls, data) -> FADT:
        """Parse a FADT from table bytes."""
        header = DescriptionHeader.from_bytes(data)
        if len(data) < _FADT_FLAGS_OFFSET + 4:
            raise AcpiError("FADT is truncated")
        (pm_tmr_blk,) = struct.unpack_from("<I", data, _FADT_PM_TMR_BLK_OFFSET)
        (flags,) = struct.unpack_from("<I", data, _FADT_FLAGS_OFFSET)
        return cls(header, pm_tmr_blk, flags)

    @property
    def pm_timer_32(self) -> bool:
        """True if the PM timer counts 32 bits rather than 24."""
        return bool((self.flags >> 8) & 1)


def xsdt_entries(memory, xsdt_address: int) -> list[DescriptionHeader]:
    """Headers of all tables that the XSDT at ``xsdt_address`` points to."""
    xsdt = _header_at(memory, xsdt_address)
    count = max(0, (xsdt.length - HEADER_SIZE) // 8)
    base = xsdt_address + HEADER_SIZE
    entries = []
    for index in range(count):
        (address,) = struct.unpack_from("<Q", memory, base + 8 * index)
        entries.append(_header_at(memory, address))
    return entries


def find_fadt(memory, rsdp_address: int) -> FADT:
    """Validate the RSDP and XSDT in ``memory`` and return the FADT."""
    rsdp = RSDP.from_bytes(memory[rsdp_address:])
    if not rsdp.is_valid():
        raise AcpiError("RSDP is not valid")

    xsdt = _header_at(memory, rsdp.xsdt_address)
    if not xsdt.is_valid("XSDT"):
        raise AcpiError("XSDT is not valid")

    for entry in xsdt_entries(memory, rsdp.xsdt_address):
        if entry.is_valid("FACP"):
            return FADT.from_bytes(memory[entry.address:])
    raise AcpiError("FADT is not found")


def wait_milliseconds(
    fadt: FADT, msec: int, read_timer: Callable[[int], int]
) -> int:
    """Busy-wait ``msec`` milliseconds using ``read_timer(port)`` as the PM timer.

    Returns the last timer value read.
    """
    start = read_timer(fadt.pm_tmr_blk)
    end = (start + PM_TIMER_FREQ * msec // 1000) & 0xFFFFFFFF
    if not fadt.pm_timer_32:
        end &= 0x00FFFFFF

    if end < start:
        while read_timer(fadt.pm_tmr_blk) >= start:
            pass
    while (value := read_timer(fadt.pm_tmr_blk)) < end:
        pass
    return value


__all__: Sequence[str] = (
    "AcpiError",
    "RSDP",
    "DescriptionHeader",
    "FADT",
    "PM_TIMER_FREQ",
    "sum_bytes",
    "xsdt_entries",
    "find_fadt",
    "wait_milliseconds",
)