"""
Pytest configuration and shared fixtures for the 2048 player tests.
"""

import random
import socket
import threading

import pytest

from game import Board

# no equal neighbours and no empty cell, nothing can move
STUCK_ROWS = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


class FixedDraw:
    """stands in for random.Random where a test needs a known draw"""

    def __init__(self, value):
        self.value = value

    def getrandbits(self, bits):
        return self.value


class ScriptedPeer(threading.Thread):
    """
    the server side of a socket pair

    answers every received line with the next scripted reply, a reply of
    None hangs up instead of answering
    """

    def __init__(self, sock, replies):
        super().__init__(daemon=True)
        self.sock = sock
        self.replies = list(replies)
        self.received = []

    def run(self):
        with self.sock, self.sock.makefile("rb") as reader:
            for reply in self.replies:
                line = reader.readline()
                if not line:
                    return
                self.received.append(line.strip().decode())
                if reply is None:
                    return
                self.sock.sendall(reply.encode() + b"\n")


@pytest.fixture
def rng():
    return random.Random(2048)


@pytest.fixture
def stuck_board():
    return Board.from_rows(STUCK_ROWS)


@pytest.fixture
def pair_board():
    """two 2s in the top row, left of them empty"""
    return Board.from_rows([
        [0, 0, 2, 2],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])


@pytest.fixture
def fixed_draw():
    return FixedDraw


@pytest.fixture
def scripted_peer():
    """start a ScriptedPeer, returns the client socket and the peer"""
    peers = []

    def start(replies):
        client, server = socket.socketpair()
        peer = ScriptedPeer(server, replies)
        peer.start()
        peers.append((client, peer))
        return client, peer

    yield start

    for client, peer in peers:
        client.close()
        peer.join(timeout=2)
