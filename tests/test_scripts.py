import pytest

import binet_precision_plot
import fibonacci_timing
import ratio_convergence_plot


def test_compare_algorithms_rows():
    rows = fibonacci_timing.compare_algorithms([5, 10], provider="doubling", repeat=1)
    assert [r[0] for r in rows] == [5, 10]
    assert [r[3] for r in rows] == [15, 177]
    assert all(r[1] >= 0 and r[2] >= 0 for r in rows)


def test_time_call_returns_value():
    value, seconds = fibonacci_timing.time_call(lambda n: n * 2, 21, repeat=2)
    assert value == 42
    assert seconds >= 0


def test_timing_main_prints_table(capsys):
    fibonacci_timing.main(["--start", "5", "--end", "10", "--step", "5",
                           "--repeat", "1", "--big", "1000", "--no-show"])
    out = capsys.readouterr().out
    assert "naive calls" in out
    assert "f(1,000) via sympy: 209 digits" in out


def test_timing_plot_saved(tmp_path):
    rows = fibonacci_timing.compare_algorithms([4, 8, 12], repeat=1)
    path = tmp_path / "timing.png"
    fibonacci_timing.plot_rows(rows, "sympy", save_path=str(path), show=False)
    assert path.exists()


def test_timing_main_bad_range():
    with pytest.raises(SystemExit):
        fibonacci_timing.main(["--start", "10", "--end", "5", "--no-show"])


def test_ratio_plot_and_report(tmp_path, capsys):
    path = tmp_path / "ratio.png"
    ratio_convergence_plot.compute_and_plot(10, save_path=str(path), show=False)
    out = capsys.readouterr().out
    assert path.exists()
    assert "error strictly decreasing: True" in out
    assert "  9 -> 55/34 ->" in out


def test_ratio_main_log_scale(tmp_path, capsys):
    path = tmp_path / "err.png"
    ratio_convergence_plot.main(["--n-max", "25", "--digits", "30", "--log",
                                 "--no-show", "--save", str(path)])
    out = capsys.readouterr().out
    assert path.exists()
    assert "phi = 1.61803398874989484820458683437" in out


def test_ratio_main_rejects_tiny_range():
    with pytest.raises(SystemExit):
        ratio_convergence_plot.main(["--n-max", "1", "--no-show"])


def test_binet_exact_with_adaptive_precision():
    errors = binet_precision_plot.binet_errors(150, None)
    assert len(errors) == 150
    assert binet_precision_plot.first_wrong_index(errors) is None


def test_binet_fixed_precision_breaks_down():
    errors = binet_precision_plot.binet_errors(100, 10)
    first = binet_precision_plot.first_wrong_index(errors)
    assert 30 < first < 100
    assert errors[:first - 1] == [0] * (first - 1)


def test_first_wrong_index():
    assert binet_precision_plot.first_wrong_index([0, 0, 3, 0]) == 3
    assert binet_precision_plot.first_wrong_index([0, 0]) is None
    assert binet_precision_plot.first_wrong_index([]) is None


def test_binet_plot_saved(tmp_path):
    path = tmp_path / "binet.png"
    first_wrong = binet_precision_plot.plot_precision(80, [10, 40], save_path=str(path), show=False)
    assert path.exists()
    assert first_wrong[40] is None
    assert first_wrong[10] is not None


def test_binet_main_report(tmp_path, capsys):
    path = tmp_path / "binet.png"
    binet_precision_plot.main(["--n-max", "60", "--digits", "40", "--no-show", "--save", str(path)])
    out = capsys.readouterr().out
    assert "  40 digits: exact for every n <= 60" in out
    assert "adaptive precision: exact for every n <= 60" in out


def test_binet_main_rejects_huge_range():
    with pytest.raises(SystemExit):
        binet_precision_plot.main(["--n-max", "5000", "--no-show"])
