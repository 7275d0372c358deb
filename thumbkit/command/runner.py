"""
Runs generated commands without a shell.
Pipelines are started as chained processes; a failure in any stage fails the run.
"""
import subprocess
import tempfile
from typing import List, Optional
import logging

from ..core.exceptions import ExecutionError
from ..core.interfaces import ICommandRunner
from .command import Command

logger = logging.getLogger(__name__)


def _launch_error(argv: List[str], error: OSError) -> ExecutionError:
    if isinstance(error, FileNotFoundError):
        return ExecutionError(f"Executable not found: {argv[0]}")
    return ExecutionError(f"Cannot execute {argv[0]}: {error}")


class CommandRunner(ICommandRunner):
    """Executes a Command and raises ExecutionError when it fails."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, command: Command) -> None:
        stages = command.stages()
        logger.debug(f"Running: {command}")

        if len(stages) == 1:
            self._run_single(stages[0])
        else:
            self._run_pipeline(stages)

    def _run_single(self, argv: List[str]) -> None:
        try:
            result = subprocess.run(
                argv,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout
            )
        except OSError as e:
            raise _launch_error(argv, e) from None
        except subprocess.TimeoutExpired:
            raise ExecutionError(f"{argv[0]} timed out after {self.timeout}s") from None

        if result.returncode != 0:
            raise ExecutionError(
                f"{argv[0]} failed with code {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr.strip()
            )

    def _run_pipeline(self, stages: List[List[str]]) -> None:
        processes: List[subprocess.Popen] = []
        errors = [tempfile.TemporaryFile() for _ in stages]
        upstream = None

        try:
            for index, argv in enumerate(stages):
                is_last = index == len(stages) - 1
                try:
                    process = subprocess.Popen(
                        argv,
                        stdin=upstream,
                        stdout=subprocess.DEVNULL if is_last else subprocess.PIPE,
                        stderr=errors[index]
                    )
                except OSError as e:
                    for started in processes:
                        started.kill()
                        started.wait()
                    raise _launch_error(argv, e) from None

                # parent drops its copy so the upstream stage sees a closed pipe
                if upstream is not None:
                    upstream.close()
                upstream = process.stdout
                processes.append(process)

            try:
                processes[-1].wait(timeout=self.timeout)
            except subprocess.TimeoutExpired:
                for process in processes:
                    process.kill()
                    process.wait()
                raise ExecutionError(f"{stages[-1][0]} timed out after {self.timeout}s") from None

            for process in processes[:-1]:
                process.wait()

            for argv, process, stderr in zip(stages, processes, errors):
                if process.returncode != 0:
                    stderr.seek(0)
                    raise ExecutionError(
                        f"{argv[0]} failed with code {process.returncode}",
                        returncode=process.returncode,
                        stderr=stderr.read().decode("utf-8", errors="ignore").strip()
                    )
        finally:
            if upstream is not None:
                upstream.close()
            for stderr in errors:
                stderr.close()
