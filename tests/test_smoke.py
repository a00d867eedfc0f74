"""Smoke test to verify the project is set up correctly."""

from disk_sim import __doc__, __version__, run_simulation


def test_package_is_importable() -> None:
    """Verify that disk_sim can be imported."""
    assert __doc__ is not None
    assert __version__


def test_public_entrypoint_runs() -> None:
    """The re-exported run_simulation works end to end."""
    report = run_simulation([1, 2, 3])
    assert set(report.summary()) == {"fcfs", "sstf", "scan"}
