import io
import socket

import pytest

from algokit.topology import (
    CONTROLLER_ID,
    Command,
    NodeMessage,
    Topology,
    run_controller,
)


def _free_port():
    with socket.socket() as probe:
        probe.bind(("", 0))
        return probe.getsockname()[1]


def _control(text):
    out = io.StringIO()
    topology = run_controller(io.StringIO(text), out, _free_port())
    return out.getvalue(), topology


def test_new_topology_holds_only_controller():
    topology = Topology()
    assert topology.nodes() == [CONTROLLER_ID]
    assert CONTROLLER_ID in topology
    assert 1 not in topology


def test_create_adds_nodes_in_order():
    topology = Topology()
    topology.create(1, -1)
    topology.create(2, 1)
    assert topology.nodes() == [-1, 1, 2]
    assert 2 in topology


def test_create_existing_raises():
    topology = Topology()
    topology.create(1, -1)
    with pytest.raises(ValueError, match="Already exists"):
        topology.create(1, -1)


def test_create_with_unknown_parent_raises_and_changes_nothing():
    topology = Topology()
    with pytest.raises(KeyError):
        topology.create(3, 9)
    assert topology.nodes() == [-1]


def test_kill_removes_node_and_direct_children_only():
    topology = Topology()
    topology.create(1, -1)
    topology.create(2, 1)
    topology.create(3, 2)
    assert topology.kill(1) == [1, 2]
    assert topology.nodes() == [-1, 3]


def test_kill_unknown_raises():
    with pytest.raises(KeyError):
        Topology().kill(5)


def test_killed_node_can_be_created_again():
    topology = Topology()
    topology.create(1, -1)
    topology.kill(1)
    topology.create(1, -1)
    assert topology.nodes() == [-1, 1]


def test_message_round_trip():
    message = NodeMessage(Command.EXEC, 4, "hello", "ll")
    assert NodeMessage.unpack(message.pack()) == message


def test_message_strings_are_nul_padded():
    packed = NodeMessage(Command.PING, 0, "hello").pack()
    assert packed[:5] == b"hello"
    assert packed[5] == 0


def test_messages_have_fixed_size():
    short = NodeMessage(Command.PING).pack()
    long = NodeMessage(Command.EXEC, 1, "x" * 255, "y" * 255).pack()
    assert len(short) == len(long)


def test_overlong_string_is_rejected():
    with pytest.raises(ValueError):
        NodeMessage(Command.EXEC, 1, "x" * 256, "y").pack()


def test_unpack_wrong_size_raises():
    with pytest.raises(ValueError):
        NodeMessage.unpack(b"abc")


def test_unpack_unknown_command_raises():
    packed = bytearray(NodeMessage(Command.PING).pack())
    good = NodeMessage.unpack(bytes(packed))
    assert good.command is Command.PING
    index = bytes(packed).rfind((2).to_bytes(4, "little"))
    packed[index:index + 4] = (9).to_bytes(4, "little")
    with pytest.raises(ValueError):
        NodeMessage.unpack(bytes(packed))


def test_controller_exec_on_missing_node():
    output, _ = _control("exec 7 abc a\n")
    assert output == "Error:7: Not found\n"


def test_controller_create_errors():
    output, topology = _control("create -1 5\ncreate 2 9\n")
    assert output == "Error: Already exists\nError: Parent not found\n"
    assert topology.nodes() == [-1]


def test_controller_kill_missing_node():
    output, _ = _control("kill 3\n")
    assert output == "ID not found\n"


def test_controller_stops_when_controller_is_killed():
    output, topology = _control("pingall\nkill -1\nkill 3\n")
    assert output == "Programm stopped\n"
    assert CONTROLLER_ID not in topology