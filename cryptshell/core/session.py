# core/session.py - Mount session lifecycle and guaranteed cleanup
"""
MountSession binds one encrypted store to one mount target for the lifetime
of one invocation, and guarantees the cleartext view is detached on every
exit path.

RULES:
- Cleanup is registered BEFORE the mount target is created
- The target is created with signals deferred, so the session always owns it
- release() runs its steps at most once; later calls make no external calls
- release() never raises; a failed detach is logged and the target kept
- An ephemeral target is removed only once it is no longer a mount point
- A user-designated target is never removed

Signals (SignalGuard):
- While a foreground child runs, signals are recorded, not raised.
  SIGTERM/SIGHUP are forwarded to the child; SIGINT already reached it
  through the terminal's foreground process group.
- When the child returns, a recorded signal is raised as SessionInterrupted.
- Outside a child, a signal raises SessionInterrupted immediately.
- During release() signals are only recorded, so cleanup runs to the end.
  A signal that lands before the deferral takes effect is recorded and the
  release retried.

Usage:
    with MountSession(detach=detach) as session:
        session.acquire_target(lambda: (Paths.create_ephemeral_target(), True))
        attach_store(config, store, session.target, guard=session.guard)
        session.mark_attached()
        run_foreground(command, cwd=session.target, shell=True, guard=session.guard)
"""

import atexit
import contextlib
import logging
import signal
import subprocess
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional, Sequence, Tuple, Union

from cryptshell.core.errors import SessionInterrupted
from cryptshell.core.platform import is_mount_point

_session_logger = logging.getLogger("cryptshell.session")

# Signals that end a session (SIGHUP: terminal closed)
SESSION_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


# =============================================================================
# Signal guard
# =============================================================================


class SignalGuard:
    """
    Converts interrupt/termination signals into SessionInterrupted at safe
    points, so they unwind through the session's cleanup.
    """

    def __init__(self, signals: Sequence[int] = SESSION_SIGNALS):
        self._signals = tuple(signals)
        self._previous: Dict[int, object] = {}
        self._child: Optional[subprocess.Popen] = None
        self._deferring = 0
        self.pending: Optional[int] = None

    # -------------------------------------------------------------------------
    # Installation
    # -------------------------------------------------------------------------

    def install(self) -> None:
        """Install handlers, remembering the previous ones."""
        for signum in self._signals:
            try:
                self._previous[signum] = signal.signal(signum, self._handle)
            except ValueError as e:
                # Only the main thread may install handlers
                _session_logger.warning(f"Cannot install handler for {signal.Signals(signum).name}: {e}")

    def restore(self) -> None:
        """Put back the handlers that were active before install()."""
        for signum, previous in self._previous.items():
            signal.signal(signum, previous)
        self._previous.clear()

    def __enter__(self) -> "SignalGuard":
        self.install()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore()
        return False

    # -------------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------------

    def _handle(self, signum, frame) -> None:
        _session_logger.debug(f"Received {signal.Signals(signum).name}")

        if self._deferring or self._child is not None:
            self.record(signum)
            if self._child is not None:
                self._forward(signum)
            return

        raise SessionInterrupted(signum)

    def _forward(self, signum: int) -> None:
        """Pass SIGTERM/SIGHUP on to the running child."""
        if signum == signal.SIGINT or self._child is None:
            return
        try:
            self._child.send_signal(signum)
        except ProcessLookupError:
            pass

    @contextlib.contextmanager
    def deferred(self) -> Iterator[None]:
        """Record signals instead of raising them inside this block."""
        self._deferring += 1
        try:
            yield
        finally:
            self._deferring -= 1

    @contextlib.contextmanager
    def child(self, proc: subprocess.Popen) -> Iterator[subprocess.Popen]:
        """Mark ``proc`` as the foreground child while the block runs."""
        self._child = proc
        if self.pending is not None:
            # Arrived between spawn and registration
            self._forward(self.pending)
        try:
            yield proc
        finally:
            self._child = None

    def record(self, signum: int) -> None:
        """Keep ``signum`` as the pending signal unless one is already pending."""
        if self.pending is None:
            self.pending = signum

    def raise_pending(self) -> None:
        """Raise SessionInterrupted for a recorded signal, if any."""
        if self.pending is not None:
            signum = self.pending
            self.pending = None
            raise SessionInterrupted(signum)


def run_foreground(
    args: Union[str, Sequence[str]],
    *,
    cwd: Optional[Path] = None,
    shell: bool = False,
    guard: Optional[SignalGuard] = None,
) -> int:
    """
    Run an interactive command in the foreground and wait for it, without
    a timeout.

    With a guard, signals delivered while the child runs are deferred until
    it exits and then raised as SessionInterrupted.

    Returns:
        The child's exit status
    """
    popen_args = args if shell else [str(a) for a in args]
    cwd_str = str(cwd) if cwd is not None else None

    if guard is None:
        return subprocess.Popen(popen_args, cwd=cwd_str, shell=shell).wait()

    with guard.deferred():
        proc = subprocess.Popen(popen_args, cwd=cwd_str, shell=shell)
        with guard.child(proc):
            returncode = proc.wait()
    guard.raise_pending()
    return returncode


# =============================================================================
# Mount session
# =============================================================================


class MountSession:
    """
    Runtime state of one mount: target path, ephemeral flag, attached flag.

    Entering the session registers release() with atexit and installs the
    signal guard; leaving it by any path calls release(). The target may be
    given up front or created later with acquire_target().

    Attributes:
        target: Absolute, symlink-free mount target (None until acquired)
        ephemeral: True if this session created the target and owns it
        attached: True between a successful attach and release()
        released: True once release() has run
    """

    def __init__(
        self,
        target: Optional[Path] = None,
        ephemeral: bool = False,
        *,
        detach: Callable[[Path], bool],
        guard: Optional[SignalGuard] = None,
    ):
        self.target = Path(target) if target is not None else None
        self.ephemeral = ephemeral
        self.attached = False
        self.released = False
        self.guard = guard or SignalGuard()
        self._detach = detach

    def __repr__(self) -> str:
        return (
            f"MountSession(target={self.target}, ephemeral={self.ephemeral}, "
            f"attached={self.attached}, released={self.released})"
        )

    def __enter__(self) -> "MountSession":
        atexit.register(self.release)
        self.guard.install()
        _session_logger.debug(f"Cleanup registered for {self.target or 'pending target'}")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self.release()
        finally:
            if self.released:
                self.guard.restore()
                atexit.unregister(self.release)
            else:
                # release() was cut short; atexit still owns the cleanup
                _session_logger.warning(f"Cleanup of {self.target} deferred to process exit")

        if exc_type is None:
            # A signal that arrived during cleanup still ends the process
            self.guard.raise_pending()
        return False

    def acquire_target(self, create: Callable[[], Tuple[Path, bool]]) -> Path:
        """
        Create the mount target with signals deferred and take ownership.

        Args:
            create: Returns (target, ephemeral flag); runs exactly once

        Raises:
            SessionInterrupted: A signal arrived while the target was created
                (the session owns the target, so cleanup removes it)
        """
        if self.released:
            raise RuntimeError("MountSession cannot acquire a target after release")
        with self.guard.deferred():
            target, ephemeral = create()
            self.target = Path(target)
            self.ephemeral = ephemeral
        _session_logger.debug(f"Session owns {'ephemeral' if ephemeral else 'user'} target {self.target}")
        self.guard.raise_pending()
        return self.target

    def mark_attached(self) -> None:
        """Record that the provider attached the store to the target."""
        if self.released:
            raise RuntimeError("MountSession cannot be re-attached after release")
        self.attached = True
        _session_logger.debug(f"Attached at {self.target}")

    def release(self) -> None:
        """
        Detach the target if mounted, then remove it if ephemeral.

        Idempotent: only the first call does any work.
        """
        while not self.released:
            try:
                with self.guard.deferred():
                    if self.released:
                        return
                    self.released = True
                    self._release()
            except SessionInterrupted as e:
                # Delivered before the deferral took effect
                self.guard.record(e.signum)

    def _release(self) -> None:
        if self.target is None:
            return

        if is_mount_point(self.target):
            _session_logger.info(f"Detaching {self.target}")
            try:
                detached = self._detach(self.target)
            except Exception as e:
                _session_logger.error(f"Detach of {self.target} raised: {e}")
                detached = False
            if not detached:
                _session_logger.warning(f"Detach of {self.target} reported failure")

        if is_mount_point(self.target):
            # Never remove a busy mount point
            _session_logger.warning(f"{self.target} is still mounted; leaving it in place")
            return

        self.attached = False

        if not self.ephemeral:
            return

        try:
            self.target.rmdir()
            _session_logger.debug(f"Removed ephemeral target {self.target}")
        except FileNotFoundError:
            pass
        except OSError as e:
            _session_logger.warning(f"Could not remove {self.target}: {e}")
