import pytest

from aegiskern.syscalls import (
    Syscall,
    SyscallRequest,
    syscall_call,
    syscall_device_map,
    syscall_exit,
    syscall_grant_create,
    syscall_grant_revoke,
    syscall_heartbeat,
    syscall_irq_ack,
    syscall_irq_bind,
    syscall_notify,
    syscall_recv,
    syscall_recv2,
    syscall_send,
    syscall_wait_notify,
    syscall_write,
    syscall_yield,
    write_str,
)


@pytest.mark.parametrize(
    "make, number",
    [
        (lambda: syscall_yield(), 0),
        (lambda: syscall_send(0, 0, 0, 0, 0), 1),
        (lambda: syscall_recv(0), 2),
        (lambda: syscall_call(0, 0, 0, 0, 0), 3),
        (lambda: syscall_write(b"x"), 4),
        (lambda: syscall_notify(0, 1), 5),
        (lambda: syscall_wait_notify(), 6),
        (lambda: syscall_grant_create(0, 1), 7),
        (lambda: syscall_grant_revoke(0), 8),
        (lambda: syscall_irq_bind(33, 1), 9),
        (lambda: syscall_irq_ack(33), 10),
        (lambda: syscall_device_map(0), 11),
        (lambda: syscall_heartbeat(50), 12),
        (lambda: syscall_exit(0), 13),
    ],
)
def test_syscall_numbers_match_abi(make, number):
    req = make()
    assert req.number == number
    assert req.registers()["x7"] == number


def test_yield_sets_only_x7():
    assert syscall_yield().registers() == {"x7": int(Syscall.YIELD)}


def test_send_registers():
    req = syscall_send(1, 5, 0xCAFE, 7, 8)
    assert req.registers() == {
        "x0": 5,
        "x1": 0xCAFE,
        "x2": 7,
        "x3": 8,
        "x6": 1,
        "x7": int(Syscall.SEND),
    }


def test_call_registers_and_result():
    req = syscall_call(2, 11, 12, 13, 14)
    regs = req.registers()
    assert regs["x7"] == int(Syscall.CALL)
    assert regs["x6"] == 2
    assert [regs[f"x{i}"] for i in range(4)] == [11, 12, 13, 14]
    assert req.results == syscall_recv(2).results


def test_recv_and_recv2_share_number():
    one = syscall_recv(3)
    two = syscall_recv2(3)
    assert one.number == two.number == Syscall.RECV
    assert one.registers() == two.registers() == {"x6": 3, "x7": int(Syscall.RECV)}
    assert two.results == one.results + 1


def test_write_carries_data_and_length():
    req = syscall_write(b"hello")
    assert req.data == b"hello"
    assert req.registers() == {"x1": len(b"hello"), "x7": int(Syscall.WRITE)}


def test_write_str_encodes_utf8_round_trip():
    text = "L5:ELF é"
    req = write_str(text)
    assert req.data.decode("utf-8") == text
    assert req.registers()["x1"] == len(text.encode("utf-8"))


def test_write_str_empty():
    req = write_str("")
    assert req.data == b""
    assert req.registers()["x1"] == 0


def test_write_rejects_str():
    with pytest.raises(TypeError):
        syscall_write("text")


def test_notify_registers():
    req = syscall_notify(4, 0x05)
    assert req.registers() == {"x0": 0x05, "x6": 4, "x7": int(Syscall.NOTIFY)}


def test_wait_notify_returns_bits():
    req = syscall_wait_notify()
    assert req.number == Syscall.WAIT_NOTIFY
    assert req.results == syscall_recv(0).results
    assert req.registers() == {"x7": int(Syscall.WAIT_NOTIFY)}


def test_grant_calls():
    create = syscall_grant_create(0, 1)
    assert create.registers() == {"x0": 0, "x6": 1, "x7": int(Syscall.GRANT_CREATE)}
    revoke = syscall_grant_revoke(0)
    assert revoke.registers() == {"x0": 0, "x7": int(Syscall.GRANT_REVOKE)}


def test_irq_calls():
    bind = syscall_irq_bind(33, 0x01)
    assert bind.registers() == {"x0": 33, "x1": 0x01, "x7": int(Syscall.IRQ_BIND)}
    ack = syscall_irq_ack(33)
    assert ack.registers() == {"x0": 33, "x7": int(Syscall.IRQ_ACK)}


def test_device_map_and_heartbeat():
    assert syscall_device_map(0).registers() == {"x0": 0, "x7": int(Syscall.DEVICE_MAP)}
    assert syscall_heartbeat(50).registers() == {"x0": 50, "x7": int(Syscall.HEARTBEAT)}


def test_exit_never_returns():
    req = syscall_exit(0)
    assert req.returns is False
    assert req.registers() == {"x0": 0, "x7": int(Syscall.EXIT)}
    assert syscall_yield().returns is True


def test_full_u64_values_accepted():
    top = 0xFFFF_FFFF_FFFF_FFFF
    req = syscall_send(top, top, top, top, top)
    assert set(req.registers().values()) == {top, int(Syscall.SEND)}


@pytest.mark.parametrize(
    "make",
    [
        lambda: syscall_send(1, -1, 0, 0, 0),
        lambda: syscall_send(1 << 64, 0, 0, 0, 0),
        lambda: syscall_recv(-1),
        lambda: syscall_notify(0, 1 << 64),
        lambda: syscall_exit(-5),
        lambda: syscall_heartbeat(1 << 70),
    ],
)
def test_out_of_range_values_rejected(make):
    with pytest.raises(ValueError):
        make()


def test_non_int_rejected():
    with pytest.raises(TypeError):
        syscall_irq_ack("33")


def test_request_is_immutable_value():
    a = syscall_send(1, 2, 3, 4, 5)
    b = syscall_send(1, 2, 3, 4, 5)
    assert a == b
    assert isinstance(a, SyscallRequest)
    with pytest.raises(AttributeError):
        a.endpoint = 9