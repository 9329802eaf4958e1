"""AArch64 descriptor bits, page-table layout and host-side MMU checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

NUM_TASKS = 8
"""Number of task slots the page-table layout is sized for."""

# Descriptor types
TABLE = 0b11
BLOCK = 0b01
PAGE = 0b11

# AttrIndx (bits [4:2]) into MAIR_EL1
ATTR_DEVICE = 0 << 2
ATTR_NORMAL_NC = 1 << 2
ATTR_NORMAL_WB = 2 << 2

# Access permissions (bits [7:6])
AP_RW_EL1 = 0b00 << 6
AP_RO_EL1 = 0b10 << 6
AP_RW_EL0 = 0b01 << 6
AP_RO_EL0 = 0b11 << 6

# Shareability (bits [9:8])
SH_NON = 0b00 << 8
SH_INNER = 0b11 << 8

AF = 1 << 10
"""Access flag; must be set because the core has no hardware AF management."""

PXN = 1 << 53
UXN = 1 << 54
XN = PXN | UXN

# Composed descriptor templates
DEVICE_BLOCK = BLOCK | ATTR_DEVICE | AP_RW_EL1 | AF | XN
DEVICE_BLOCK_EL0 = BLOCK | ATTR_DEVICE | AP_RW_EL0 | AF | XN
RAM_BLOCK = BLOCK | ATTR_NORMAL_WB | AP_RW_EL1 | SH_INNER | AF
KERNEL_CODE_PAGE = PAGE | ATTR_NORMAL_WB | AP_RO_EL1 | SH_INNER | AF
KERNEL_RODATA_PAGE = PAGE | ATTR_NORMAL_WB | AP_RO_EL0 | SH_INNER | AF | XN
KERNEL_DATA_PAGE = PAGE | ATTR_NORMAL_WB | AP_RW_EL1 | SH_INNER | AF | XN
USER_DATA_PAGE = PAGE | ATTR_NORMAL_WB | AP_RW_EL0 | SH_INNER | AF | XN
USER_CODE_PAGE = PAGE | ATTR_NORMAL_WB | AP_RO_EL0 | SH_INNER | AF | PXN
SHARED_CODE_PAGE = PAGE | ATTR_NORMAL_WB | AP_RO_EL0 | SH_INNER | AF

AP_MASK = 0b11 << 6
"""Mask selecting the access-permission bits of a descriptor."""

PT_TYPES_PER_TASK = 4
NUM_PAGE_TABLE_PAGES = PT_TYPES_PER_TASK * NUM_TASKS + 4
"""Four page tables per task plus four for the kernel."""


class PageTableType(IntEnum):
    """Page table kind within a task's set of four tables."""

    L2_DEVICE = 0
    L1 = 1
    L2_RAM = 2
    L3 = 3


def pt_index(task_id: int, pt_type: PageTableType) -> int:
    """Return the page-table storage index for ``task_id`` and ``pt_type``."""
    return int(PageTableType(pt_type)) * NUM_TASKS + task_id


PT_L2_DEVICE_0 = pt_index(0, PageTableType.L2_DEVICE)
PT_L1_TASK0 = pt_index(0, PageTableType.L1)
PT_L2_RAM_TASK0 = pt_index(0, PageTableType.L2_RAM)
PT_L3_TASK0 = pt_index(0, PageTableType.L3)

PT_L2_DEVICE_KERNEL = PT_TYPES_PER_TASK * NUM_TASKS
PT_L1_KERNEL = PT_TYPES_PER_TASK * NUM_TASKS + 1
PT_L2_RAM_KERNEL = PT_TYPES_PER_TASK * NUM_TASKS + 2
PT_L3_KERNEL = PT_TYPES_PER_TASK * NUM_TASKS + 3


@dataclass(frozen=True)
class DeviceInfo:
    """A whitelisted device that may be mapped into an EL0 task."""

    l2_index: int
    intid: int
    name: str


DEVICES: tuple[DeviceInfo, ...] = (
    DeviceInfo(l2_index=72, intid=33, name="UART0"),
)
MAX_DEVICE_ID = len(DEVICES) - 1

DEVICE_MAP_ERR_INVALID_ID = 0xFFFF_2001
DEVICE_MAP_ERR_INVALID_TASK = 0xFFFF_2002
PAGE_ATTR_ERR_INVALID_TASK = 0xFFFF_3001
PAGE_ATTR_ERR_OUT_OF_RANGE = 0xFFFF_3002

_L3_BASE = 0x4000_0000
_L3_PAGES = 512
_PAGE_SIZE = 4096


class DeviceMapError(Exception):
    """Raised when a device cannot be mapped; ``code`` is the kernel error code."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


class PageAttrError(Exception):
    """Raised when page attributes cannot be set; ``code`` is the kernel error code."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


def _valid_task(task_id: int) -> bool:
    return 0 <= task_id < NUM_TASKS


def page_table_base(task_id: int) -> int:
    """Return the physical address of a task's L1 table (host layout)."""
    return 0x8000_0000 + task_id * 0x1_0000


def ttbr0_for_task(task_id: int, asid: int) -> int:
    """Return the TTBR0_EL1 value ``(asid << 48) | page_table_base``."""
    if not 0 <= asid <= 0xFFFF:
        raise ValueError(f"ASID must fit in 16 bits, got {asid}")
    return (asid << 48) | page_table_base(task_id)


def map_device_for_task(device_id: int, task_id: int) -> DeviceInfo:
    """Check that ``device_id`` may be mapped for ``task_id`` and return the device."""
    if not 0 <= device_id < len(DEVICES):
        raise DeviceMapError(DEVICE_MAP_ERR_INVALID_ID, f"unknown device id {device_id}")
    if not _valid_task(task_id):
        raise DeviceMapError(DEVICE_MAP_ERR_INVALID_TASK, f"invalid task id {task_id}")
    return DEVICES[device_id]


def set_page_attr(task_id: int, vaddr: int, template: int) -> None:
    """Validate a request to change the attributes of the L3 page holding ``vaddr``."""
    if not _valid_task(task_id):
        raise PageAttrError(PAGE_ATTR_ERR_INVALID_TASK, f"invalid task id {task_id}")
    if not _L3_BASE <= vaddr < _L3_BASE + _L3_PAGES * _PAGE_SIZE:
        raise PageAttrError(
            PAGE_ATTR_ERR_OUT_OF_RANGE, f"address {vaddr:#x} outside L3-mapped range"
        )