import pytest
import numpy as np
from tools.quality_runner import (Runner, quality_metrics, monobit_p, runs_p,
                                  METRIC_NAMES, P_VALUE_METRICS)
from tools.sources import get_source

@pytest.fixture(scope="module")
def runner():
    return Runner("test", data_size=4096, n_trials=10, verbose=False)

def chunks_of(runner, name):
    src = get_source(name)
    return [src.gen_fn(rng, runner.data_size) for rng in runner.trial_rngs()]

def test_metric_names():
    assert set(P_VALUE_METRICS) <= set(METRIC_NAMES)
    assert "entropy" in METRIC_NAMES and "serial_corr" in METRIC_NAMES

def test_uniform_bytes():
    """numpy's own bytes look random to every metric."""
    data = np.random.default_rng(0).integers(0, 256, 8192, dtype=np.uint8)
    m = quality_metrics(data)
    print(m)
    assert 7.9 < m['entropy'] <= 8.0
    assert abs(m['serial_corr']) < 0.1
    for k in P_VALUE_METRICS:
        assert 0.0 <= m[k] <= 1.0

def test_constant_bytes():
    """All zeros fails everything it can fail, without NaNs."""
    m = quality_metrics(np.zeros(4096, dtype=np.uint8))
    assert m['entropy'] == 0.0
    assert m['serial_corr'] == 0.0
    assert m['monobit_p'] < 1e-10
    assert m['runs_p'] == 0.0
    assert m['chi2_p'] < 1e-10
    assert all(np.isfinite(v) for v in m.values())

def test_alternating_bits_fail_runs():
    """0x55 bytes are perfectly balanced but have far too many runs."""
    data = np.full(4096, 0x55, dtype=np.uint8)
    bits = np.unpackbits(data)
    assert monobit_p(bits) == pytest.approx(1.0)
    assert runs_p(bits) < 1e-10

def test_bad_input():
    with pytest.raises(ValueError):
        quality_metrics(np.zeros(1, dtype=np.uint8))
    with pytest.raises(ValueError):
        quality_metrics(np.zeros(100, dtype=np.int32))

@pytest.mark.parametrize("name", ["NumPy PCG64", "MT19937", "MT19937-64",
                                  "LCG (java.util.Random)", "Bailey-Crandall"])
def test_good_generators_pass(runner, name):
    metrics = runner.collect(chunks_of(runner, name))
    assert all(len(v) == runner.n_trials for v in metrics.values())
    print(name, runner.pass_rates(metrics))
    assert runner.verdict(metrics) == "PASS"

def test_constant_fails(runner):
    metrics = runner.collect(chunks_of(runner, "Constant"))
    assert runner.verdict(metrics) == "FAIL"

def test_compare_finds_constant(runner):
    good = runner.collect(chunks_of(runner, "NumPy PCG64"))
    bad = runner.collect(chunks_of(runner, "Constant"))
    n_sig, findings = runner.compare(bad, good)
    assert n_sig >= 1
    assert any(m == 'entropy' for m, _, _ in findings)

    n_same, _ = runner.compare(good, good)
    assert n_same == 0

def test_cohens_d():
    assert Runner.cohens_d([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == 0.0
    assert Runner.cohens_d([1.0, 1.0], [1.0, 1.0]) == 0.0
    assert Runner.cohens_d([2.0, 2.0], [1.0, 1.0]) == float('inf')
    assert Runner.cohens_d([3.0, 4.0, 5.0], [1.0, 2.0, 3.0]) == pytest.approx(2.0)

def test_timer(runner, capsys):
    with runner.timed("nothing") as t:
        pass
    assert t.elapsed >= 0.0
    assert "nothing" in capsys.readouterr().out

def test_figure(runner, tmp_path):
    data = np.random.default_rng(1).integers(0, 256, 1024, dtype=np.uint8)
    fig, axes = runner.create_figure(3, rows=1, cols=3, figsize=(9, 3))
    assert len(axes) == 3
    runner.plot_bitmap(axes[0], data, "bits")
    runner.plot_histogram(axes[1], data, "bytes")
    runner.plot_rates(axes[2], ["slow", "fast"], [1e3, 5e5], "rates")
    out = runner.save(fig, "quality_test", out_dir=tmp_path)
    assert out.exists() and out.stat().st_size > 0
