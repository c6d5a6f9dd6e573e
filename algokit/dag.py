"""Job graphs read from YAML: validation and dependency-ordered execution."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

import yaml

DEFAULT_MAX_PROCESSES = 5


@dataclass
class Job:
    """One job of the graph; ids and dependencies are zero-based positions."""

    id: int
    dependencies: list[int] = field(default_factory=list)
    is_start: bool = False
    is_end: bool = False
    command: str = ""
    component_id: int = -1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _flag(entry: Mapping[str, Any], name: str, key: int) -> bool:
    if name not in entry:
        raise ValueError(f"job {key}: missing {name!r}")
    value = entry[name]
    if not isinstance(value, bool):
        raise ValueError(f"job {key}: {name!r} must be true or false")
    return value


def parse_config(data: Any) -> list[Job]:
    """Build jobs from a mapping of job numbers (1 to N) to job descriptions."""
    if not isinstance(data, Mapping):
        raise ValueError("configuration must be a mapping of jobs")
    jobs: list[Job] = []
    for key, entry in data.items():
        if not _is_int(key):
            raise ValueError(f"job number must be an integer: {key!r}")
        if not isinstance(entry, Mapping):
            raise ValueError(f"job {key}: description must be a mapping")
        raw_dependencies = entry.get("dependencies") or []
        if not isinstance(raw_dependencies, list) or not all(
            _is_int(dep) for dep in raw_dependencies
        ):
            raise ValueError(f"job {key}: dependencies must be a list of job numbers")
        command = entry.get("command")
        jobs.append(
            Job(
                id=key - 1,
                dependencies=[dep - 1 for dep in raw_dependencies],
                is_start=_flag(entry, "isStart", key),
                is_end=_flag(entry, "isEnd", key),
                command="" if command is None else str(command),
            )
        )
    jobs.sort(key=lambda job: job.id)
    if [job.id for job in jobs] != list(range(len(jobs))):
        raise ValueError("jobs must be numbered from 1 to N without gaps")
    for job in jobs:
        for dep in job.dependencies:
            if not 0 <= dep < len(jobs):
                raise ValueError(f"job {job.id + 1}: unknown dependency {dep + 1}")
    return jobs


def load_config(path: str) -> list[Job]:
    """Read jobs from a YAML file."""
    with open(path, encoding="utf-8") as stream:
        data = yaml.safe_load(stream)
    return parse_config(data)


def _assign(index: int, component: int, jobs: list[Job], visiting: set[int]) -> int:
    job = jobs[index]
    if job.component_id != -1:
        return job.component_id
    visiting.add(index)
    best = component
    for dep in job.dependencies:
        target = jobs[dep]
        if target.component_id == -1:
            if dep in visiting:
                continue
            target.component_id = _assign(dep, component, jobs, visiting)
        best = min(best, target.component_id)
    visiting.discard(index)
    return best


def find_components(jobs: list[Job]) -> list[int]:
    """Give every job a component id, following dependencies; return the ids in job order."""
    next_component = 0
    for job in jobs:
        if job.component_id == -1:
            job.component_id = _assign(job.id, next_component, jobs, set())
            next_component += 1
    return [job.component_id for job in jobs]


def has_single_component(jobs: list[Job]) -> bool:
    """Return True when every job carries the same component id."""
    return len({job.component_id for job in jobs}) <= 1


def has_cycle(jobs: list[Job]) -> bool:
    """Return True when the dependencies contain a cycle."""
    state: dict[int, bool] = {}  # False while on the path, True once finished

    def visit(index: int) -> bool:
        state[index] = False
        for dep in jobs[index].dependencies:
            seen = state.get(dep)
            if seen is False:
                return True
            if seen is None and visit(dep):
                return True
        state[index] = True
        return False

    return any(index not in state and visit(index) for index in range(len(jobs)))


def validate_dag(jobs: list[Job]) -> bool:
    """Check for no cycles, a start job, dependency-free end jobs and one component."""
    if has_cycle(jobs):
        return False
    if any(job.is_end and job.dependencies for job in jobs):
        return False
    find_components(jobs)
    return (
        any(job.is_start for job in jobs)
        and any(job.is_end for job in jobs)
        and has_single_component(jobs)
    )


class Pipeline:
    """A set of jobs run in dependency order, several at a time."""

    def __init__(self, jobs: Iterable[Job] = ()) -> None:
        self.jobs = list(jobs)

    @classmethod
    def from_file(cls, path: str) -> Pipeline:
        """Load a pipeline from a YAML configuration file."""
        return cls(load_config(path))

    def is_valid(self) -> bool:
        """Return whether the jobs form a valid graph."""
        return validate_dag(self.jobs)

    def execute_job(self, index: int) -> int:
        """Run the job's shell command, discarding its output; return its exit status."""
        command = self.jobs[index].command
        if not command:
            raise ValueError(f"no command found for job {index + 1}")
        print(f"Running command: {command}", flush=True)
        completed = subprocess.run(
            command, shell=True, stdout=subprocess.DEVNULL, check=False
        )
        return completed.returncode

    def _attempt(self, index: int) -> bool:
        try:
            self.execute_job(index)
        except (ValueError, OSError) as error:
            print(f"Job failed: {error}", flush=True)
            return False
        return True

    def run(self, max_processes: int = DEFAULT_MAX_PROCESSES) -> set[int]:
        """Run ready jobs in batches of at most max_processes; return the completed indices."""
        if max_processes < 1:
            raise ValueError(f"max_processes must be positive: {max_processes}")
        completed: set[int] = set()
        failed: set[int] = set()
        ready = [index for index, job in enumerate(self.jobs) if not job.dependencies]
        with ThreadPoolExecutor(max_workers=max_processes) as pool:
            while ready:
                batch, ready = ready[:max_processes], ready[max_processes:]
                for index, succeeded in zip(batch, pool.map(self._attempt, batch)):
                    (completed if succeeded else failed).add(index)
                queued = set(ready)
                ready.extend(
                    index
                    for index, job in enumerate(self.jobs)
                    if index not in completed
                    and index not in failed
                    and index not in queued
                    and all(dep in completed for dep in job.dependencies)
                )
        return completed


def main(argv: list[str] | None = None) -> int:
    """Validate and run the pipeline described by a YAML file."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: dag <config_file.yaml>", file=sys.stderr)
        return 1
    try:
        pipeline = Pipeline.from_file(args[0])
    except (OSError, yaml.YAMLError, ValueError) as error:
        print(f"Error reading configuration file: {error}", file=sys.stderr)
        pipeline = Pipeline()
    if pipeline.is_valid():
        print("DAG is valid.")
    else:
        print("DAG is not valid. Cycles detected or invalid start/end jobs.")
    sys.stdout.flush()
    pipeline.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())