"""Reading and writing a FAT32 volume held in memory."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from hobbyos.file import FileDescriptor

END_OF_CLUSTERCHAIN = 0x0FFFFFFF
DIRECTORY_ENTRY_SIZE = 32

_BPB_FORMAT = "<3s8sHBHBHHBHHHIIIHHIHH12sBBBI11s8s"
_ENTRY_FORMAT = "<11sBBBHHHHHHHI"


class Attribute(enum.IntFlag):
    """Attribute bits of a directory entry."""

    READ_ONLY = 0x01
    HIDDEN = 0x02
    SYSTEM = 0x04
    VOLUME_ID = 0x08
    DIRECTORY = 0x10
    ARCHIVE = 0x20
    LONG_NAME = 0x0F


class FatError(Exception):
    """An operation on the volume failed; ``kind`` names the cause."""

    def __init__(self, message: str, kind: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass
class BPB:
    """The BIOS parameter block at the start of a FAT32 volume."""

    jump_boot: bytes
    oem_name: bytes
    bytes_per_sector: int
    sectors_per_cluster: int
    reserved_sector_count: int
    num_fats: int
    root_entry_count: int
    total_sectors_16: int
    media: int
    fat_size_16: int
    sectors_per_track: int
    num_heads: int
    hidden_sectors: int
    total_sectors_32: int
    fat_size_32: int
    ext_flags: int
    fs_version: int
    root_cluster: int
    fs_info: int
    backup_boot_sector: int
    reserved: bytes
    drive_number: int
    reserved1: int
    boot_signature: int
    volume_id: int
    volume_label: bytes
    fs_type: bytes

    @classmethod
    def from_bytes(cls, data) -> BPB:
        """Parse a BPB from the first bytes of a volume."""
        return cls(*struct.unpack_from(_BPB_FORMAT, data, 0))


@dataclass
class DirectoryEntry:
    """A 32-byte short-name directory entry."""

    name: bytes = b" " * 11
    attr: int = 0
    ntres: int = 0
    create_time_tenth: int = 0
    create_time: int = 0
    create_date: int = 0
    last_access_date: int = 0
    first_cluster_high: int = 0
    write_time: int = 0
    write_date: int = 0
    first_cluster_low: int = 0
    file_size: int = 0
    offset: int | None = field(default=None, compare=False)

    @classmethod
    def from_bytes(cls, data, offset: int | None = None) -> DirectoryEntry:
        """Parse an entry; ``offset`` records where it lives in the volume."""
        values = struct.unpack_from(_ENTRY_FORMAT, data, 0)
        return cls(*values, offset=offset)

    def to_bytes(self) -> bytes:
        """Serialise the entry into its 32-byte on-disk form."""
        return struct.pack(
            _ENTRY_FORMAT,
            bytes(self.name),
            int(self.attr),
            self.ntres,
            self.create_time_tenth,
            self.create_time,
            self.create_date,
            self.last_access_date,
            self.first_cluster_high,
            self.write_time,
            self.write_date,
            self.first_cluster_low,
            self.file_size,
        )

    def first_cluster(self) -> int:
        """The first cluster of the file's data."""
        return self.first_cluster_low | (self.first_cluster_high << 16)


def is_end_of_clusterchain(cluster: int) -> bool:
    """True if ``cluster`` marks the end of a cluster chain."""
    return cluster >= 0x0FFFFFF8


def read_name(entry: DirectoryEntry) -> tuple[str, str]:
    """Split the short name into base and extension, without padding."""
    base = bytes(entry.name[:8]).rstrip(b" ")
    ext = bytes(entry.name[8:11]).rstrip(b" ")
    return base.decode("latin-1"), ext.decode("latin-1")


def format_name(entry: DirectoryEntry) -> str:
    """The short name as ``BASE`` or ``BASE.EXT``."""
    base, ext = read_name(entry)
    return f"{base}.{ext}" if ext else base


def format_write_time(entry: DirectoryEntry) -> str:
    """The last write time as ``YYYY-MM-DD hh:mm:ss``."""
    year = ((entry.write_date >> 9) & 0x3F) + 1980
    month = (entry.write_date >> 5) & 0xF
    day = entry.write_date & 0x1F
    hour = (entry.write_time >> 11) & 0x1F
    minute = (entry.write_time >> 5) & 0x3F
    second = (entry.write_time & 0x1F) * 2
    return f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}"


def _to_bytes(name) -> bytes:
    return name.encode("utf-8") if isinstance(name, str) else bytes(name)


def name_is_equal(entry: DirectoryEntry, name) -> bool:
    """Compare an entry's short name with a ``base.ext`` name, ignoring case."""
    raw = _to_bytes(name)
    name83 = bytearray(b" " * 11)
    i = 0
    i83 = 0
    found_dot = False
    while i < len(raw) and i83 < len(name83):
        ch = raw[i]
        if ch == ord("."):
            if found_dot:
                return False
            i83 = 8
            found_dot = True
            i += 1
            continue
        if not found_dot and i > 7:
            return False
        name83[i83] = bytes((ch,)).upper()[0]
        i += 1
        i83 += 1
    return i == len(raw) and bytes(entry.name[:11]) == bytes(name83)


def set_file_name(entry: DirectoryEntry, name) -> None:
    """Store ``name`` (``base.ext``) into the entry as an upper-case short name."""
    raw = _to_bytes(name)
    short = bytearray(b" " * 11)
    dot = raw.rfind(b".")
    if dot >= 0:
        base = raw[: min(8, dot)]
        ext = raw[dot + 1 : dot + 4]
        short[: len(base)] = base.upper()
        short[8 : 8 + len(ext)] = ext.upper()
    else:
        base = raw[:8]
        short[: len(base)] = base.upper()
    entry.name = bytes(short)


def _next_path_element(path: str) -> tuple[str, str | None, bool]:
    slash = path.find("/")
    if slash < 0:
        return (path if len(path) <= 12 else ""), None, False
    elem = path[:slash]
    return (elem if len(elem) <= 12 else ""), path[slash + 1 :], True


class FatVolume:
    """A FAT32 volume image kept in a mutable byte buffer."""

    def __init__(self, image) -> None:
        self.image = image if isinstance(image, bytearray) else bytearray(image)
        self.bpb = BPB.from_bytes(self.image)
        self.bytes_per_cluster = self.bpb.bytes_per_sector * self.bpb.sectors_per_cluster
        self._fat_offset = self.bpb.reserved_sector_count * self.bpb.bytes_per_sector
        fat_entries = self.bpb.fat_size_32 * self.bpb.bytes_per_sector // 4
        data_offset = self.cluster_offset(2)
        data_clusters = max(0, len(self.image) - data_offset) // self.bytes_per_cluster
        self._cluster_limit = min(fat_entries, 2 + data_clusters)

    def cluster_offset(self, cluster: int) -> int:
        """Byte offset in the image of the first sector of ``cluster``."""
        bpb = self.bpb
        sector = (
            bpb.reserved_sector_count
            + bpb.num_fats * bpb.fat_size_32
            + (cluster - 2) * bpb.sectors_per_cluster
        )
        return sector * bpb.bytes_per_sector

    def _fat_get(self, cluster: int) -> int:
        return struct.unpack_from("<I", self.image, self._fat_offset + 4 * cluster)[0]

    def _fat_set(self, cluster: int, value: int) -> None:
        struct.pack_into("<I", self.image, self._fat_offset + 4 * cluster, value)

    def _store_entry(self, entry: DirectoryEntry) -> None:
        if entry.offset is not None:
            self.image[entry.offset : entry.offset + DIRECTORY_ENTRY_SIZE] = entry.to_bytes()

    def directory_entries(self, cluster: int) -> list[DirectoryEntry]:
        """All directory entries stored in one cluster."""
        base = self.cluster_offset(cluster)
        return [
            DirectoryEntry.from_bytes(self.image[off : off + DIRECTORY_ENTRY_SIZE], off)
            for off in range(
                base, base + self.bytes_per_cluster - DIRECTORY_ENTRY_SIZE + 1,
                DIRECTORY_ENTRY_SIZE,
            )
        ]

    def next_cluster(self, cluster: int) -> int:
        """The cluster after ``cluster`` in its chain, or END_OF_CLUSTERCHAIN."""
        nxt = self._fat_get(cluster)
        return END_OF_CLUSTERCHAIN if is_end_of_clusterchain(nxt) else nxt

    def find_file(
        self, path: str, directory_cluster: int = 0
    ) -> tuple[DirectoryEntry | None, bool]:
        """Look up ``path``; return the entry (or None) and whether a slash followed it."""
        if path.startswith("/"):
            directory_cluster = self.bpb.root_cluster
            path = path[1:]
        elif directory_cluster == 0:
            directory_cluster = self.bpb.root_cluster

        elem, next_path, post_slash = _next_path_element(path)
        path_last = not next_path

        while directory_cluster != END_OF_CLUSTERCHAIN:
            for entry in self.directory_entries(directory_cluster):
                if entry.name[0] == 0:
                    return None, post_slash
                if not name_is_equal(entry, elem):
                    continue
                if entry.attr == Attribute.DIRECTORY and not path_last:
                    return self.find_file(next_path, entry.first_cluster())
                return entry, post_slash
            directory_cluster = self.next_cluster(directory_cluster)
        return None, post_slash

    def load_file(self, entry: DirectoryEntry, size: int) -> bytes:
        """Read up to ``size`` bytes of the file from its start."""
        return FatFileDescriptor(self, entry).read(size)

    def _free_clusters(self, start: int = 2):
        for candidate in range(start, self._cluster_limit):
            if self._fat_get(candidate) == 0:
                yield candidate

    def extend_cluster(self, eoc_cluster: int, n: int) -> int:
        """Append ``n`` free clusters to the chain; return its new last cluster."""
        while not is_end_of_clusterchain(self._fat_get(eoc_cluster)):
            eoc_cluster = self._fat_get(eoc_cluster)
        current = eoc_cluster
        free = self._free_clusters()
        for _ in range(n):
            candidate = next(free, None)
            if candidate is None:
                raise FatError("no free cluster left", "no_enough_memory")
            self._fat_set(current, candidate)
            current = candidate
        self._fat_set(current, END_OF_CLUSTERCHAIN)
        return current

    def allocate_entry(self, dir_cluster: int) -> DirectoryEntry:
        """Return a free entry of the directory, growing it by a cluster if full."""
        while True:
            for entry in self.directory_entries(dir_cluster):
                if entry.name[0] in (0x00, 0xE5):
                    return entry
            nxt = self.next_cluster(dir_cluster)
            if nxt == END_OF_CLUSTERCHAIN:
                break
            dir_cluster = nxt
        dir_cluster = self.extend_cluster(dir_cluster, 1)
        base = self.cluster_offset(dir_cluster)
        self.image[base : base + self.bytes_per_cluster] = bytes(self.bytes_per_cluster)
        return self.directory_entries(dir_cluster)[0]

    def create_file(self, path: str) -> DirectoryEntry:
        """Create an empty file entry at ``path`` and return it."""
        parent_cluster = self.bpb.root_cluster
        filename = path
        slash = path.rfind("/")
        if slash >= 0:
            filename = path[slash + 1 :]
            if not filename:
                raise FatError(f"is a directory: {path}", "is_directory")
            parent_name = path[:slash]
            if parent_name:
                parent, _ = self.find_file(parent_name)
                if parent is None:
                    raise FatError(f"no such entry: {parent_name}", "no_such_entry")
                parent_cluster = parent.first_cluster()

        entry = self.allocate_entry(parent_cluster)
        set_file_name(entry, filename)
        entry.file_size = 0
        self._store_entry(entry)
        return entry

    def allocate_cluster_chain(self, n: int) -> int:
        """Build a chain of ``n`` free clusters; return its first cluster."""
        first = next(self._free_clusters(), None)
        if first is None:
            raise FatError("no free cluster left", "no_enough_memory")
        self._fat_set(first, END_OF_CLUSTERCHAIN)
        if n > 1:
            self.extend_cluster(first, n - 1)
        return first


class FatFileDescriptor(FileDescriptor):
    """An open file on a FAT volume with separate read and write positions."""

    def __init__(self, volume: FatVolume, entry: DirectoryEntry) -> None:
        self._volume = volume
        self._entry = entry
        self._rd_off = 0
        self._rd_cluster = 0
        self._rd_cluster_off = 0
        self._wr_off = 0
        self._wr_cluster = 0
        self._wr_cluster_off = 0

    def read(self, size: int) -> bytes:
        vol = self._volume
        bpc = vol.bytes_per_cluster
        if self._rd_cluster == 0:
            self._rd_cluster = self._entry.first_cluster()
        size = max(0, min(size, self._entry.file_size - self._rd_off))

        out = bytearray()
        while len(out) < size and not is_end_of_clusterchain(self._rd_cluster):
            base = vol.cluster_offset(self._rd_cluster)
            n = min(size - len(out), bpc - self._rd_cluster_off)
            start = base + self._rd_cluster_off
            out += vol.image[start : start + n]
            self._rd_cluster_off += n
            if self._rd_cluster_off == bpc:
                self._rd_cluster = vol.next_cluster(self._rd_cluster)
                self._rd_cluster_off = 0

        self._rd_off += len(out)
        return bytes(out)

    def write(self, data: bytes) -> int:
        vol = self._volume
        bpc = vol.bytes_per_cluster
        data = bytes(data)

        def num_clusters(nbytes: int) -> int:
            return (nbytes + bpc - 1) // bpc

        if self._wr_cluster == 0:
            if self._entry.first_cluster() != 0:
                self._wr_cluster = self._entry.first_cluster()
            else:
                self._wr_cluster = vol.allocate_cluster_chain(num_clusters(len(data)))
                self._entry.first_cluster_low = self._wr_cluster & 0xFFFF
                self._entry.first_cluster_high = (self._wr_cluster >> 16) & 0xFFFF

        total = 0
        while total < len(data):
            if self._wr_cluster_off == bpc:
                nxt = vol.next_cluster(self._wr_cluster)
                if nxt == END_OF_CLUSTERCHAIN:
                    self._wr_cluster = vol.extend_cluster(
                        self._wr_cluster, num_clusters(len(data) - total)
                    )
                else:
                    self._wr_cluster = nxt
                self._wr_cluster_off = 0

            base = vol.cluster_offset(self._wr_cluster)
            n = min(len(data) - total, bpc - self._wr_cluster_off)
            start = base + self._wr_cluster_off
            vol.image[start : start + n] = data[total : total + n]
            total += n
            self._wr_cluster_off += n

        self._wr_off += total
        self._entry.file_size = self._wr_off
        vol._store_entry(self._entry)
        return total

    def size(self) -> int:
        return self._entry.file_size

    def load(self, size: int, offset: int) -> bytes:
        fd = FatFileDescriptor(self._volume, self._entry)
        fd._rd_off = offset
        bpc = self._volume.bytes_per_cluster
        cluster = self._entry.first_cluster()
        while offset >= bpc:
            offset -= bpc
            cluster = self._volume.next_cluster(cluster)
        fd._rd_cluster = cluster
        fd._rd_cluster_off = offset
        return fd.read(size)