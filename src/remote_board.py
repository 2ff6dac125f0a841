"""
client for a board that lives on a remote server

every command is one line (":left", ":board", ...) and the server answers
every command with one line of board notation
"""
import logging
import socket

from notation import NotationError, parse_board

logger = logging.getLogger(__name__)

GAME_OVER = ":gameover"
BOARD = ":board"


class CommunicationError(Exception):
    """the remote board could not be reached or answered garbage"""


def parse_address(address):
    """split "host:port" into (host, port)"""
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise CommunicationError(f"Invalid server address {address!r}, expected host:port")
    return host, int(port)


class RemoteBoard:
    """one connection, owned by one game for its whole duration"""

    def __init__(self, sock):
        self.sock = sock
        self._reader = sock.makefile("rb")

    @classmethod
    def connect(cls, address, timeout=None):
        host, port = parse_address(address)
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise CommunicationError(f"Cannot connect to {address}: {e}") from e
        logger.info("connected to %s", address)
        return cls(sock)

    def command(self, command):
        """send one command and return the reply line"""
        logger.debug("send %s", command)
        try:
            self.sock.sendall(command.encode("ascii") + b"\n")
            reply = self._reader.readline()
        except OSError as e:
            raise CommunicationError(f"Command {command} failed: {e}") from e

        reply = reply.strip()
        if not reply:
            raise CommunicationError(f"Empty reply to {command}")
        logger.debug("recv %s", reply)
        return reply.decode("ascii", errors="replace")

    def move(self, direction):
        return self.command(":" + str(direction))

    def fetch_board(self):
        reply = self.command(BOARD)
        try:
            return parse_board(reply)
        except NotationError as e:
            raise CommunicationError(f"Malformed board from server: {e}") from e

    def game_over(self):
        return self.command(GAME_OVER)

    def close(self):
        self._reader.close()
        self.sock.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
