"""
SSR Bridge: Script Execution Context

The script environment is a single logical thread of execution. It exposes
one render entry point, one error-classification predicate and a preloaded
component manifest, and it is NOT safe to call concurrently. Serialization is
the Renderer's job; nothing in here locks.

NodeScriptContext runs the server bundle in a long-lived Node child process
and talks line-delimited JSON-RPC to runtime/bridge.js over stdin/stdout.
"""

from __future__ import annotations

import contextlib
import json
import logging
import subprocess
import threading
from collections import deque
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from engine.ssr.errors import BridgeStartupError, ExecutionFault, ScriptError
from engine.ssr.manifest import Manifest
from engine.ssr.types import Entry, RenderResult

logger = logging.getLogger(__name__)

BRIDGE_JS = Path(__file__).parent / "runtime" / "bridge.js"

# stderr lines kept around for error messages when the child dies
_STDERR_TAIL = 50


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


class ScriptContext:
    """
    Abstract script execution context.
    Implement with a real engine for production, or in-memory for tests.
    """

    manifest: Manifest

    def render(self, entries: Sequence[Entry]) -> RenderResult:
        """Render the entries to head/body fragments. Not reentrant."""
        raise NotImplementedError

    def is_render_error(self, exc: BaseException) -> bool:
        """True when exc is a failure raised by component code."""
        raise NotImplementedError

    def close(self) -> None:
        """Release the underlying engine, if any."""


# ---------------------------------------------------------------------------
# Node implementation
# ---------------------------------------------------------------------------


class NodeScriptContext(ScriptContext):
    """Manages a long-lived Node child process running the server bundle."""

    def __init__(
        self,
        build_dir: str | Path,
        node_binary: str = "node",
        command: Sequence[str] | None = None,
        ready_timeout: float = 30.0,
    ):
        self.build_dir = Path(build_dir)
        self.node_binary = node_binary
        self.command = list(command) if command else None
        self.ready_timeout = ready_timeout
        self._ready_timed_out = False
        self.manifest = Manifest()
        self.process: subprocess.Popen[str] | None = None
        self._id = 0
        self._stderr_tail: deque[str] = deque(maxlen=_STDERR_TAIL)
        self._stderr_thread: threading.Thread | None = None

    def start(self) -> None:
        """Spawn the child and wait for its ready line. Called once at startup."""
        if self.command is None:
            self._check_node()
            argv = [self.node_binary, str(BRIDGE_JS), str(self.build_dir)]
        else:
            argv = [*self.command, str(self.build_dir)]

        try:
            self.process = subprocess.Popen(  # noqa: S603
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                bufsize=1,  # Line buffered
            )
        except OSError as e:
            raise BridgeStartupError(f"Failed to spawn script process: {e}") from e

        self._stderr_thread = threading.Thread(
            target=self._drain_stderr,
            args=(self.process,),
            name="ssr-node-stderr",
            daemon=True,
        )
        self._stderr_thread.start()

        watchdog = threading.Timer(self.ready_timeout, self._kill_unready, args=(self.process,))
        watchdog.daemon = True
        watchdog.start()
        try:
            line = self.process.stdout.readline()
            if not line:
                if self._ready_timed_out:
                    raise BridgeStartupError(
                        f"Script process not ready after {self.ready_timeout:g}s. stderr: {self._tail()}"
                    )
                raise BridgeStartupError(f"Script process exited before ready. stderr: {self._tail()}")

            msg = json.loads(line)
            if not msg.get("ready"):
                raise BridgeStartupError(f"Script process failed to start: {msg.get('error') or msg}")

            self.manifest = Manifest.from_exports(msg.get("manifest"))
        except Exception as e:
            self.stop()
            if isinstance(e, BridgeStartupError):
                raise
            raise BridgeStartupError(f"Failed to start script process: {e}") from e
        finally:
            watchdog.cancel()

        logger.info(
            "node: script context ready pid=%s components=%d build_dir=%s",
            self.process.pid,
            len(self.manifest),
            self.build_dir,
        )

    def _kill_unready(self, process: subprocess.Popen[str]) -> None:
        self._ready_timed_out = True
        logger.error("node: no ready line after %gs, killing pid=%s", self.ready_timeout, process.pid)
        process.kill()

    def _check_node(self) -> None:
        try:
            subprocess.run(  # noqa: S603
                [self.node_binary, "--version"],
                capture_output=True,
                check=True,
                timeout=5,
            )
        except (FileNotFoundError, subprocess.SubprocessError) as e:
            raise BridgeStartupError(
                f"Node.js not found at {self.node_binary!r}. Install Node.js 18+ or set NODE_BINARY."
            ) from e

    def _drain_stderr(self, process: subprocess.Popen[str]) -> None:
        """Forward script console output to logging until the pipe closes."""
        for raw in process.stderr:
            line = raw.rstrip("\n")
            self._stderr_tail.append(line)
            logger.info("node: %s", line)

    def _tail(self) -> str:
        return "\n".join(self._stderr_tail)

    def call(self, method: str, params: dict[str, Any]) -> Any:
        """Send one JSON-RPC call and block for its reply."""
        if not self.process:
            raise ExecutionFault("Script process not started")

        self._id += 1
        try:
            request = json.dumps({"id": self._id, "method": method, "params": params}, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ExecutionFault(f"Render input is not JSON-serializable: {e}") from e

        try:
            self.process.stdin.write(request + "\n")
            self.process.stdin.flush()
            response = self._read_reply()
        except (BrokenPipeError, OSError) as e:
            self.stop()
            raise ExecutionFault(f"Script process communication failed: {e}") from e

        if response.get("id") != self._id:
            # Replies can no longer be paired with requests
            self.stop()
            raise ExecutionFault(f"Out-of-order reply: expected id {self._id}, got {response.get('id')}")

        if "error" in response:
            raise _script_error(response["error"])

        return response.get("result")

    def _read_reply(self) -> dict[str, Any]:
        """Read stdout until a protocol reply arrives, logging anything else."""
        while True:
            line = self.process.stdout.readline()
            if not line:
                tail = self._tail()
                self.stop()
                raise ExecutionFault(f"Script process died. stderr: {tail}")

            try:
                response = json.loads(line)
            except json.JSONDecodeError:
                response = None

            if isinstance(response, dict) and "id" in response:
                return response
            logger.warning("node: stray stdout line: %r", line.rstrip("\n")[:200])

    def render(self, entries: Sequence[Entry]) -> RenderResult:
        result = self.call("render", {"entries": [e.to_dict() for e in entries]})
        if not isinstance(result, dict):
            raise ExecutionFault(f"render returned {type(result).__name__}, expected an object")
        return RenderResult(head=result.get("head") or "", body=result.get("body") or "")

    def is_render_error(self, exc: BaseException) -> bool:
        return isinstance(exc, ScriptError) and exc.render_error

    def stop(self) -> None:
        """Kill the child process."""
        if self.process:
            try:
                self.process.terminate()
                self.process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                self.process.kill()
                self.process.wait()
            finally:
                for pipe in (self.process.stdin, self.process.stdout):
                    with contextlib.suppress(OSError):
                        pipe.close()
                logger.info("node: script context stopped")
                self.process = None

    def close(self) -> None:
        self.stop()

    def __del__(self):
        """Cleanup on destruction."""
        self.stop()


def _script_error(err: Any) -> ScriptError:
    if isinstance(err, dict):
        return ScriptError(
            str(err.get("message") or "script error"),
            stack=str(err.get("stack") or ""),
            render_error=bool(err.get("renderError")),
        )
    return ScriptError(str(err))
