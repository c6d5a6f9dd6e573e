import shlex
import sys

import pytest
import yaml

from algokit.dag import (
    Job,
    Pipeline,
    find_components,
    has_cycle,
    has_single_component,
    load_config,
    main,
    parse_config,
    validate_dag,
)


def _append_command(path, text):
    code = f"open({str(path)!r}, 'a').write({text!r})"
    return shlex.join([sys.executable, "-c", code])


def _chain():
    return [
        Job(0, [1], is_start=True, is_end=False),
        Job(1, [], is_start=False, is_end=True),
    ]


def test_parse_config_shifts_numbers_to_positions():
    jobs = parse_config(
        {
            1: {"isStart": True, "isEnd": False, "dependencies": [2], "command": "make"},
            2: {"isStart": False, "isEnd": True},
        }
    )
    assert [job.id for job in jobs] == [0, 1]
    assert jobs[0].dependencies == [1]
    assert jobs[0].command == "make"
    assert jobs[1].dependencies == []
    assert jobs[1].command == ""
    assert jobs[0].is_start and jobs[1].is_end


def test_parse_config_orders_jobs_by_number():
    jobs = parse_config(
        {
            2: {"isStart": False, "isEnd": True},
            1: {"isStart": True, "isEnd": False, "dependencies": [2]},
        }
    )
    assert [job.id for job in jobs] == [0, 1]
    assert jobs[0].is_start


def test_parse_config_requires_flags():
    with pytest.raises(ValueError):
        parse_config({1: {"isStart": True}})


def test_parse_config_rejects_unknown_dependency():
    with pytest.raises(ValueError):
        parse_config({1: {"isStart": True, "isEnd": True, "dependencies": [7]}})


def test_parse_config_rejects_gap_in_numbers():
    with pytest.raises(ValueError):
        parse_config({1: {"isStart": True, "isEnd": False}, 3: {"isStart": False, "isEnd": True}})


def test_parse_config_rejects_non_mapping():
    with pytest.raises(ValueError):
        parse_config(["not", "a", "mapping"])


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "jobs.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                1: {"isStart": True, "isEnd": False, "dependencies": [2], "command": "echo a"},
                2: {"isStart": False, "isEnd": True, "command": "echo b"},
            }
        )
    )
    jobs = load_config(str(path))
    assert [job.command for job in jobs] == ["echo a", "echo b"]
    assert jobs[0].dependencies == [1]


def test_find_components_links_dependent_jobs():
    jobs = _chain()
    ids = find_components(jobs)
    assert ids == [job.component_id for job in jobs]
    assert len(set(ids)) == 1
    assert has_single_component(jobs)


def test_find_components_separates_independent_jobs():
    jobs = [Job(0, [], True, False), Job(1, [], False, True)]
    ids = find_components(jobs)
    assert ids[0] != ids[1]
    assert not has_single_component(jobs)


def test_has_cycle_detects_loop():
    assert has_cycle([Job(0, [1]), Job(1, [0])])
    assert has_cycle([Job(0, [0])])
    assert not has_cycle(_chain())


def test_validate_dag_accepts_chain():
    assert validate_dag(_chain())


def test_validate_dag_rejects_end_with_dependencies():
    jobs = [Job(0, [1], True, False), Job(1, [0], False, True)]
    assert not validate_dag(jobs)
    jobs = [Job(0, [], True, False), Job(1, [0], False, True)]
    assert not validate_dag(jobs)


def test_validate_dag_requires_start_and_end():
    assert not validate_dag([Job(0, [1], False, False), Job(1, [], False, True)])
    assert not validate_dag([Job(0, [1], True, False), Job(1, [], False, False)])
    assert not validate_dag([])


def test_validate_dag_rejects_two_components():
    jobs = [Job(0, [], True, False), Job(1, [], False, True)]
    assert not validate_dag(jobs)


def test_run_respects_dependencies(tmp_path):
    log = tmp_path / "log.txt"
    jobs = [
        Job(0, [], True, False, _append_command(log, "a")),
        Job(1, [0], False, True, _append_command(log, "b")),
    ]
    completed = Pipeline(jobs).run()
    assert completed == {0, 1}
    assert log.read_text() == "ab"


def test_run_skips_dependents_of_failed_job(tmp_path):
    log = tmp_path / "log.txt"
    jobs = [
        Job(0, [], True, False, ""),
        Job(1, [0], False, True, _append_command(log, "b")),
    ]
    completed = Pipeline(jobs).run()
    assert completed == set()
    assert not log.exists()


def test_run_rejects_zero_processes():
    with pytest.raises(ValueError):
        Pipeline(_chain()).run(0)


def test_execute_job_returns_exit_status():
    command = shlex.join([sys.executable, "-c", "raise SystemExit(3)"])
    pipeline = Pipeline([Job(0, [], True, True, command)])
    assert pipeline.execute_job(0) == 3


def test_execute_job_without_command_raises():
    with pytest.raises(ValueError):
        Pipeline([Job(0, [], True, True, "")]).execute_job(0)


def test_pipeline_from_file_is_valid(tmp_path):
    path = tmp_path / "jobs.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                1: {"isStart": True, "isEnd": False, "dependencies": [2]},
                2: {"isStart": False, "isEnd": True},
            }
        )
    )
    assert Pipeline.from_file(str(path)).is_valid()


def test_main_requires_one_argument():
    assert main([]) == 1


def test_main_reports_valid_dag_and_runs(tmp_path, capsys):
    log = tmp_path / "log.txt"
    path = tmp_path / "jobs.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                1: {"isStart": True, "isEnd": False, "dependencies": [2],
                    "command": _append_command(log, "x")},
                2: {"isStart": False, "isEnd": True, "command": _append_command(log, "y")},
            }
        )
    )
    assert main([str(path)]) == 0
    assert "DAG is valid." in capsys.readouterr().out
    assert log.read_text() == "yx"


def test_main_reports_unreadable_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.yaml")]) == 0
    captured = capsys.readouterr()
    assert "Error reading configuration file" in captured.err
    assert "DAG is not valid." in captured.out