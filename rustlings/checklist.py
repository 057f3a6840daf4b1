"""Grading every exercise at once and recording the results as JSON."""

from __future__ import annotations

import json
import os
import threading
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .exercise import Exercise
from .run import run
from .verify import VerificationFailed

CHECK_RESULT_PATH = ".github/result/check_result.json"


@dataclass
class ExerciseResult:
    """Whether one exercise passed."""

    name: str
    result: bool


@dataclass
class ExerciseStatistics:
    """Totals over a grading run."""

    total_exercations: int = 0
    total_succeeds: int = 0
    total_failures: int = 0
    total_time: int = 0


@dataclass
class ExerciseCheckList:
    """All results of a grading run."""

    exercises: list[ExerciseResult] = field(default_factory=list)
    user_name: str | None = None
    statistics: ExerciseStatistics = field(default_factory=ExerciseStatistics)

    def to_dict(self) -> dict:
        """Return the JSON-ready structure."""
        return asdict(self)

    def to_json(self) -> str:
        """Return the results as indented JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


def _now() -> int:
    return int(time.time())


def cicv_verify(
    exercises: Iterable[Exercise],
    verbose: bool = True,
    output_path: str | os.PathLike = CHECK_RESULT_PATH,
) -> ExerciseCheckList:
    """Run every exercise concurrently, print progress and write the results file."""
    exercises = list(exercises)
    started = _now()
    total = len(exercises)
    checklist = ExerciseCheckList(statistics=ExerciseStatistics(total_exercations=total))
    lock = threading.Lock()

    def check(exercise: Exercise, task_started: int) -> None:
        try:
            run(exercise, verbose)
            passed = True
        except VerificationFailed:
            passed = False
        with lock:
            if passed:
                checklist.statistics.total_succeeds += 1
                print(f"{exercise.name}执行成功")
            else:
                checklist.statistics.total_failures += 1
                print(f"{exercise.name}执行失败")
            print(f"总的题目数: {total}")
            print(f"当前做正确的题目数: {checklist.statistics.total_succeeds}")
            print(f"当前修改试卷耗时: {_now() - task_started} s")
            checklist.exercises.append(ExerciseResult(name=exercise.name, result=passed))

    with ThreadPoolExecutor() as pool:
        futures = [pool.submit(check, exercise, _now()) for exercise in exercises]
        for future in futures:
            future.result()

    total_time = _now() - started
    print(
        "===============================试卷批改完成,总耗时: "
        f"{total_time} s; =================================="
    )
    checklist.statistics.total_time = total_time

    target = Path(output_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(checklist.to_json(), encoding="utf-8")
    return checklist