"""Host tools: ``file`` for type classification, ``7z`` for archives."""

from __future__ import annotations

import asyncio
import logging
import shlex
import tempfile
from typing import AsyncIterator

from arcbrowse.config import settings
from arcbrowse.errors import ToolIOError, ToolUnavailableError
from arcbrowse.services.path_resolver import confine

logger = logging.getLogger(__name__)

OUTPUT_ENCODING = "utf-8"


class ExternalTools:
    """Spawns the classifier and archive tool and collects their stdout.

    Exit codes are logged but never treated as failures: a tool that
    prints nothing simply produces an empty result downstream.
    """

    def __init__(
        self,
        classifier_command: str | None = None,
        archive_command: str | None = None,
        scratch_prefix: str | None = None,
    ):
        self._classifier = shlex.split(classifier_command or settings.classifier_command)
        self._archive = shlex.split(archive_command or settings.archive_command)
        self._scratch_prefix = scratch_prefix or settings.scratch_prefix

    async def _spawn(self, argv: list[str], capture: bool = True) -> asyncio.subprocess.Process:
        logger.debug("Spawning: %s", " ".join(argv))
        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE if capture else asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise ToolUnavailableError(f"{argv[0]}: {e.strerror or e}") from e
        except ValueError as e:
            # argv with an embedded NUL cannot be passed to exec
            raise ToolUnavailableError(f"{argv[0]}: {e}") from e

    async def _wait(self, proc: asyncio.subprocess.Process, name: str) -> None:
        returncode = await proc.wait()
        if returncode != 0:
            logger.warning("%s exited with code %d", name, returncode)

    async def _run(self, argv: list[str]) -> str:
        proc = await self._spawn(argv)
        try:
            output = await proc.stdout.read()
        except OSError as e:
            raise ToolIOError(f"{argv[0]}: {e}") from e
        finally:
            await self._wait(proc, argv[0])
        return output.decode(OUTPUT_ENCODING, errors="replace")

    async def classify(self, path: str) -> str:
        """Human-readable description of ``path``, verbatim."""
        return await self._run([*self._classifier, path])

    async def archive_list(self, path: str) -> str:
        """Full ``l`` listing of the archive at ``path``."""
        return await self._run([*self._archive, "l", path])

    async def iter_archive_list(self, path: str) -> AsyncIterator[str]:
        """Yield the ``l`` listing line by line, newlines kept."""
        argv = [*self._archive, "l", path]
        proc = await self._spawn(argv)
        try:
            while True:
                try:
                    line = await proc.stdout.readline()
                except (OSError, ValueError) as e:
                    raise ToolIOError(f"{argv[0]}: {e}") from e
                if not line:
                    break
                yield line.decode(OUTPUT_ENCODING, errors="replace")
        finally:
            if proc.returncode is None and proc.stdout.at_eof():
                await self._wait(proc, argv[0])
            elif proc.returncode is None:
                proc.kill()
                await proc.wait()

    async def archive_extract(self, archive_path: str, member: str, dest_dir: str) -> str:
        """Extract one member into ``dest_dir``; returns where it should land."""
        target = confine(dest_dir, member)
        argv = [*self._archive, "x", archive_path, "-o" + dest_dir, member]
        proc = await self._spawn(argv, capture=False)
        await self._wait(proc, argv[0])
        return target

    def make_scratch_dir(self) -> str:
        """Fresh, unique directory for one extraction."""
        return tempfile.mkdtemp(prefix=self._scratch_prefix)
