# aegiskern

A pure-Python, host-side model of a small AArch64 microkernel for the QEMU
`virt` machine. It holds the parts of the kernel and its user space that are
plain logic: the memory map, page-descriptor bits and page-table layout, serial
output formatting, the system-call register ABI and the demo user programs.

## Modules

- `aegiskern.platform`: the QEMU `virt` memory map as constants
  (`GICD_BASE`, `GICC_BASE`, `UART0_BASE`, `RAM_BASE`, `KERNEL_BASE`,
  `TIMER_INTID`, `TICK_MS`, `TIMER_FREQ_HZ`, `ELF_LOAD_BASE`,
  `ELF_LOAD_SIZE_PER_TASK`, `MAX_ELF_TASKS`, `ELF_FIRST_TASK_ID`) and
  `elf_load_addr(slot)`, the load address of a 16 KiB ELF slot. A negative
  slot raises `ValueError`.
- `aegiskern.mmu`: AArch64 descriptor bits (`TABLE`, `BLOCK`, `PAGE`, the
  `ATTR_*`, `AP_*`, `SH_*` fields, `AF`, `PXN`, `UXN`, `XN`) and composed
  templates such as `DEVICE_BLOCK`, `KERNEL_DATA_PAGE`, `USER_CODE_PAGE` and
  `SHARED_CODE_PAGE`. Page-table storage is laid out for `NUM_TASKS` (8)
  tasks: `PageTableType` with `pt_index(task_id, pt_type)`, the `PT_*`
  indices, and `NUM_PAGE_TABLE_PAGES` (36).
  - `page_table_base(task_id)` and `ttbr0_for_task(task_id, asid)` give a
    task's table address and its TTBR0 value with the ASID in bits 48 and up
    (an ASID outside 16 bits raises `ValueError`).
  - `DEVICES` is the registry of mappable devices (`DeviceInfo` with
    `l2_index`, `intid`, `name`; entry 0 is `UART0`).
    `map_device_for_task(device_id, task_id)` returns the `DeviceInfo` or
    raises `DeviceMapError`.
  - `set_page_attr(task_id, vaddr, template)` checks that the task exists and
    that `vaddr` lies in the 2 MiB L3-mapped range starting at `0x4000_0000`,
    raising `PageAttrError` otherwise.
  - Both error classes carry the kernel's numeric error in `.code`
    (`DEVICE_MAP_ERR_INVALID_ID`, `DEVICE_MAP_ERR_INVALID_TASK`,
    `PAGE_ATTR_ERR_INVALID_TASK`, `PAGE_ATTR_ERR_OUT_OF_RANGE`).
- `aegiskern.uart`: `Uart` writes bytes to a binary stream, which is an
  in-memory `io.BytesIO` unless you pass one. It has `write(byte)`,
  `print(s)` (UTF-8), `print_hex(val)` (16 upper-case hex digits) and
  `print_dec(val)`. The helpers `format_hex(val)` and `format_dec(val)`
  return the same text and reject values outside 64 unsigned bits.
- `aegiskern.syscalls`: the `Syscall` numbers (0 `YIELD` to 13 `EXIT`).
  Each call is built by a function that returns a frozen `SyscallRequest`:
  `syscall_yield`, `syscall_send`, `syscall_recv`, `syscall_recv2`,
  `syscall_call`, `syscall_write`, `write_str`, `syscall_notify`,
  `syscall_wait_notify`, `syscall_grant_create`, `syscall_grant_revoke`,
  `syscall_irq_bind`, `syscall_irq_ack`, `syscall_device_map`,
  `syscall_heartbeat` and `syscall_exit`.
  - `SyscallRequest.registers()` maps register names to values: `x0` to
    `x3` hold the payload, `x1` holds the buffer length for a write, `x6`
    holds the endpoint or target task, and `x7` holds the call number.
  - `results` is the number of result words the call hands back.
  - `returns` is `False` for `syscall_exit`.
- `aegiskern.tasks`: the demo user programs `hello_task`, `sensor_task` and
  `logger_task`. Each one is a generator that yields `SyscallRequest` objects
  and receives each call's result through `send`. `nibble_char(value)` returns
  the lower-case hex digit of the low four bits of a value.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from aegiskern import mmu, platform
from aegiskern.uart import Uart, format_hex
from aegiskern.syscalls import syscall_send
from aegiskern.tasks import logger_task

assert platform.elf_load_addr(1) == 0x4010_4000
assert mmu.pt_index(0, mmu.PageTableType.L3) == 24

uart = Uart()
uart.print("tick=")
uart.print_dec(42)
assert uart.stream.getvalue() == b"tick=42"

assert format_hex(0xDEADBEEF) == "00000000DEADBEEF"

req = syscall_send(1, 7, 0xCAFE, 0, 0)
print(req.registers())
# {'x0': 7, 'x1': 51966, 'x2': 0, 'x3': 0, 'x6': 1, 'x7': 1}

# Drive the logger by hand: the value sent back after its receive call
# is the reading it logs.
task = logger_task()
next(task)                    # write "LOGGER:init "
next(task)                    # receive on endpoint 1
print(task.send(0x2B).data)   # b'LOG:'
print(next(task).data)        # b'b'
```

## What it does not do

The package has no kernel that runs the programs. There is no scheduler, IPC,
grant, IRQ or watchdog logic that carries out the requests a task yields, and
there is no ELF loader. You drive the task generators yourself. The MMU
functions only check and compute values; they build no page tables. The
package has no command-line entry point and is used as a library.