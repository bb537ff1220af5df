"""src.cli_bridge.bridge.runner

Exécution d'un processus enfant: stdin complet en entrée, stdout/stderr capturés.

Important:
- stdin, stdout et stderr sont traités par trois tâches asyncio indépendantes.
  Un enfant qui remplit stderr avant de lire stdin ne peut donc pas bloquer le bridge.
- Les erreurs de pipe (BrokenPipe, reset) sont capturées, jamais levées: le code de
  sortie et stderr restent la meilleure explication de l'échec.
- Le processus est toujours récolté (kill si nécessaire) avant de rendre la main.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from ..core.constants import KILL_GRACE_S, READ_CHUNK_SIZE
from ..core.exceptions import BridgeTimeoutError, SpawnError
from ..core.models import BridgeState, ExitOutcome

logger = logging.getLogger(__name__)

StageCallback = Callable[[BridgeState], None]


def _noop_stage(_stage: BridgeState) -> None:
    return None


async def _feed_stdin(stdin: asyncio.StreamWriter, payload: bytes) -> str | None:
    """Écrit `payload` puis ferme stdin. Retourne l'erreur d'écriture éventuelle."""
    error: str | None = None
    try:
        if payload:
            stdin.write(payload)
            await stdin.drain()
    except (BrokenPipeError, ConnectionResetError) as e:
        error = f"{type(e).__name__}: {e}"
        logger.warning("Écriture stdin interrompue après envoi partiel (%d bytes): %s", len(payload), error)
    finally:
        stdin.close()

    try:
        await stdin.wait_closed()
    except (BrokenPipeError, ConnectionResetError) as e:
        error = error or f"{type(e).__name__}: {e}"
    return error


async def _drain_stream(
    stream: asyncio.StreamReader,
    buffer: bytearray,
    *,
    name: str,
    errors: list[str],
) -> None:
    """Accumule `stream` dans `buffer` jusqu'à EOF."""
    while True:
        try:
            chunk = await stream.read(READ_CHUNK_SIZE)
        except OSError as e:
            errors.append(f"{name}: {e}")
            logger.warning("Lecture %s interrompue après %d bytes: %s", name, len(buffer), e)
            return
        if not chunk:
            return
        buffer.extend(chunk)


async def _communicate(
    proc: asyncio.subprocess.Process,
    payload: bytes,
    on_stage: StageCallback,
) -> ExitOutcome:
    assert proc.stdin is not None
    assert proc.stdout is not None
    assert proc.stderr is not None

    stdout_buf = bytearray()
    stderr_buf = bytearray()
    read_errors: list[str] = []

    on_stage(BridgeState.WRITING)
    stdin_task = asyncio.create_task(_feed_stdin(proc.stdin, payload))
    stdout_task = asyncio.create_task(
        _drain_stream(proc.stdout, stdout_buf, name="stdout", errors=read_errors)
    )
    stderr_task = asyncio.create_task(
        _drain_stream(proc.stderr, stderr_buf, name="stderr", errors=read_errors)
    )
    # stdin est encore en cours d'écriture: lecture et écriture sont concurrentes
    on_stage(BridgeState.COLLECTING)

    try:
        write_error, _, _ = await asyncio.gather(stdin_task, stdout_task, stderr_task)
        returncode = await proc.wait()
        on_stage(BridgeState.TERMINATED)
    finally:
        for task in (stdin_task, stdout_task, stderr_task):
            if not task.done():
                task.cancel()

    return ExitOutcome(
        returncode=returncode,
        stdout=bytes(stdout_buf),
        stderr=bytes(stderr_buf),
        write_error=write_error,
        read_errors=read_errors,
    )


async def _reap(proc: asyncio.subprocess.Process) -> None:
    """Tue le processus s'il tourne encore, puis attend sa fin."""
    if proc.returncode is not None:
        return

    try:
        proc.kill()
    except ProcessLookupError:
        # Déjà terminé entre-temps
        pass

    try:
        await asyncio.wait_for(proc.wait(), timeout=KILL_GRACE_S)
    except asyncio.TimeoutError:
        logger.error("Processus pid=%s non récolté %.1fs après kill()", proc.pid, KILL_GRACE_S)


async def run_executable(
    executable: Path,
    payload: bytes,
    *,
    timeout_s: float | None = None,
    on_stage: StageCallback | None = None,
) -> ExitOutcome:
    """
    Lance `executable` sans argument, lui transmet `payload` sur stdin
    et attend sa terminaison.

    Args:
        executable: Chemin de l'exécutable (déjà résolu)
        payload: Octets à écrire sur stdin
        timeout_s: Délai maximal (None ou <= 0: pas de délai)
        on_stage: Rappel appelé à chaque changement d'étape (WRITING, COLLECTING, TERMINATED)

    Returns:
        ExitOutcome avec code de sortie et sorties capturées

    Raises:
        SpawnError: le processus n'a pas pu être lancé
        BridgeTimeoutError: le délai a expiré (le processus est tué)
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            str(executable),
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.error("Impossible de démarrer %s: %s", executable, e)
        raise SpawnError(
            message=f"Impossible de démarrer {executable.name}: {e}",
            executable=str(executable),
            errno=e.errno,
        ) from e

    on_stage = on_stage or _noop_stage
    logger.debug("pid=%s lancé (%s), stdin=%d bytes", proc.pid, executable.name, len(payload))

    try:
        if timeout_s is None or timeout_s <= 0:
            return await _communicate(proc, payload, on_stage)
        try:
            return await asyncio.wait_for(_communicate(proc, payload, on_stage), timeout=timeout_s)
        except asyncio.TimeoutError:
            logger.error("pid=%s: délai de %.1fs dépassé, arrêt du processus", proc.pid, timeout_s)
            raise BridgeTimeoutError(
                message=f"{executable.name} n'a pas terminé en {timeout_s:g}s",
                timeout_s=timeout_s,
                pid=proc.pid,
            ) from None
    finally:
        await _reap(proc)
