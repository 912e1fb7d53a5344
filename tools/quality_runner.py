"""
Quality Runner — shared boilerplate for looking at generator output.

Collects statistical quality metrics over byte streams, compares two
sources, times generators and draws dark-themed figures, so the CLI and
ad-hoc scripts only need to supply data.

Usage:
    from tools.quality_runner import Runner
    from tools.sources import get_source

    runner = Runner("MT19937 check")

    src = get_source("MT19937")
    chunks = [src.gen_fn(rng, runner.data_size) for rng in runner.trial_rngs()]
    metrics = runner.collect(chunks)
    print(runner.verdict(metrics))

    # Compare two sources
    n_sig, findings = runner.compare(metrics_a, metrics_b)

    # Figure
    fig, axes = runner.create_figure(2, "MT19937", rows=1, cols=2)
    runner.plot_bitmap(axes[0], chunks[0], "bits")
    runner.plot_histogram(axes[1], chunks[0], "bytes")
    runner.save(fig, "mt19937")
"""

import time
import warnings
from pathlib import Path

import numpy as np
from scipy import special as sp_special
from scipy import stats as sp_stats

_ROOT = Path(__file__).resolve().parents[1]

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib import gridspec

DATA_SIZE = 4096
N_TRIALS = 10
ALPHA = 0.01

# Metrics that are p-values; the rest are descriptive.
P_VALUE_METRICS = ('chi2_p', 'monobit_p', 'runs_p')


# ----------------------------------------------------------
# Per-chunk statistics
# ----------------------------------------------------------
def byte_chi2_p(data):
    """Chi-square goodness of fit of the byte histogram against uniform."""
    counts = np.bincount(data, minlength=256)
    return float(sp_stats.chisquare(counts).pvalue)


def monobit_p(bits):
    """NIST SP 800-22 frequency test."""
    n = len(bits)
    s = abs(2 * int(bits.sum()) - n)
    return float(sp_special.erfc(s / np.sqrt(2 * n)))


def runs_p(bits):
    """NIST SP 800-22 runs test; 0.0 when the frequency pre-test fails."""
    n = len(bits)
    pi = bits.mean()
    if abs(pi - 0.5) >= 2 / np.sqrt(n):
        return 0.0
    v = 1 + int(np.count_nonzero(bits[1:] != bits[:-1]))
    num = abs(v - 2 * n * pi * (1 - pi))
    den = 2 * np.sqrt(2 * n) * pi * (1 - pi)
    return float(sp_special.erfc(num / den))


def serial_correlation(data):
    """Lag-1 autocorrelation of the byte values (0.0 for constant data)."""
    x = data.astype(float)
    if x.std() < 1e-15:
        return 0.0
    return float(np.corrcoef(x[:-1], x[1:])[0, 1])


def byte_entropy(data):
    """Shannon entropy of the byte histogram, in bits (max 8)."""
    counts = np.bincount(data, minlength=256)
    return float(sp_stats.entropy(counts, base=2))


def quality_metrics(data):
    """All metrics for one uint8 chunk."""
    if data.dtype != np.uint8:
        raise ValueError(f"expected uint8 data, got {data.dtype}")
    if len(data) < 2:
        raise ValueError(f"Data too short for quality metrics ({len(data)} bytes)")
    bits = np.unpackbits(data)
    return {
        'chi2_p': byte_chi2_p(data),
        'monobit_p': monobit_p(bits),
        'runs_p': runs_p(bits),
        'serial_corr': serial_correlation(data),
        'entropy': byte_entropy(data),
    }


METRIC_NAMES = sorted(quality_metrics(np.arange(256, dtype=np.uint8)).keys())


class Runner:
    """Reusable quality runner with all boilerplate baked in."""

    def __init__(self, name, data_size=DATA_SIZE, n_trials=N_TRIALS,
                 alpha=ALPHA, seed=42, verbose=True):
        self.name = name
        self.data_size = data_size
        self.n_trials = n_trials
        self.alpha = alpha
        self.seed = seed
        self.fig_dir = _ROOT / "figures"
        self.metric_names = list(METRIC_NAMES)
        self.n_metrics = len(self.metric_names)
        self.bonf_alpha = alpha / self.n_metrics

        if verbose:
            print(f"Runner: {name}")
            print(f"  data_size={data_size}, trials={n_trials}, "
                  f"alpha={alpha}, metrics={self.n_metrics}")

    # ----------------------------------------------------------
    # RNG helpers
    # ----------------------------------------------------------
    def trial_rngs(self, offset=0):
        """Return a list of n_trials independent seeding RNGs."""
        return [np.random.default_rng(self.seed + offset + i)
                for i in range(self.n_trials)]

    # ----------------------------------------------------------
    # Data collection
    # ----------------------------------------------------------
    def collect(self, chunks):
        """Measure chunks, return {metric_name: [values]}."""
        out = {m: [] for m in self.metric_names}
        for chunk in chunks:
            for mn, mv in quality_metrics(chunk).items():
                if np.isfinite(mv):
                    out[mn].append(mv)
        return out

    def pass_rates(self, metrics):
        """Fraction of trials whose p-value clears alpha, per p-value metric."""
        rates = {}
        for m in P_VALUE_METRICS:
            vals = np.array(metrics.get(m, []))
            rates[m] = float(np.mean(vals > self.alpha)) if len(vals) else 0.0
        return rates

    def verdict(self, metrics, min_rate=0.8):
        """'PASS' when every p-value metric clears alpha in min_rate of trials."""
        rates = self.pass_rates(metrics)
        return "PASS" if all(r >= min_rate for r in rates.values()) else "FAIL"

    # ----------------------------------------------------------
    # Statistics
    # ----------------------------------------------------------
    @staticmethod
    def cohens_d(a, b):
        """Pooled-std Cohen's d."""
        na, nb = len(a), len(b)
        sa, sb = np.std(a, ddof=1), np.std(b, ddof=1)
        ps = np.sqrt(((na - 1) * sa**2 + (nb - 1) * sb**2) / (na + nb - 2))
        if ps < 1e-15:
            diff = np.mean(a) - np.mean(b)
            return 0.0 if abs(diff) < 1e-15 else np.sign(diff) * float('inf')
        return (np.mean(a) - np.mean(b)) / ps

    def compare(self, data_a, data_b):
        """Compare two metric dicts. Returns (n_sig, [(metric, d, p), ...])."""
        sig = 0
        findings = []
        for m in self.metric_names:
            a = np.array(data_a.get(m, []))
            b = np.array(data_b.get(m, []))
            if len(a) < 3 or len(b) < 3:
                continue
            d = self.cohens_d(a, b)
            if not np.isfinite(d):
                continue
            with warnings.catch_warnings():
                warnings.simplefilter('ignore', RuntimeWarning)
                _, p = sp_stats.ttest_ind(a, b, equal_var=False)
            if p < self.bonf_alpha and abs(d) > 0.8:
                sig += 1
                findings.append((m, d, p))
        findings.sort(key=lambda x: -abs(x[1]))
        return sig, findings

    # ----------------------------------------------------------
    # Timing
    # ----------------------------------------------------------
    def timed(self, label):
        """Context manager for timing blocks."""
        return _Timer(label)

    # ----------------------------------------------------------
    # Figure helpers
    # ----------------------------------------------------------
    @staticmethod
    def _apply_dark_theme():
        plt.rcParams.update({
            'figure.facecolor': '#181818',
            'axes.facecolor': '#181818',
            'axes.edgecolor': '#444444',
            'axes.labelcolor': 'white',
            'text.color': 'white',
            'xtick.color': '#cccccc',
            'ytick.color': '#cccccc',
        })

    @staticmethod
    def dark_ax(ax):
        """Apply dark theme to a single axis."""
        ax.set_facecolor('#181818')
        for spine in ax.spines.values():
            spine.set_color('#444444')
        ax.tick_params(colors='#cccccc', labelsize=7)
        return ax

    def create_figure(self, n_panels, title=None, rows=2, cols=3,
                      figsize=(20, 14)):
        """Create a dark-themed figure with gridspec panels."""
        self._apply_dark_theme()
        fig = plt.figure(figsize=figsize, facecolor='#181818')
        gs = gridspec.GridSpec(rows, cols, figure=fig, hspace=0.35,
                               wspace=0.35, left=0.06, right=0.97,
                               top=0.93, bottom=0.06)
        fig.suptitle(title or self.name, fontsize=15, fontweight='bold',
                     color='white')

        axes = []
        for i in range(min(n_panels, rows * cols)):
            r, c = divmod(i, cols)
            ax = fig.add_subplot(gs[r, c])
            self.dark_ax(ax)
            axes.append(ax)
        return fig, axes

    def plot_bitmap(self, ax, data, title, width=128):
        """Raw output bits as a black/white image, one row per width bits."""
        bits = np.unpackbits(data)
        rows = len(bits) // width
        ax.imshow(bits[:rows * width].reshape(rows, width), cmap='gray',
                  interpolation='nearest', aspect='auto')
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(title, fontsize=11)

    def plot_histogram(self, ax, data, title, color='#3498db'):
        """Byte histogram with the uniform expectation drawn in."""
        counts = np.bincount(data, minlength=256)
        ax.bar(np.arange(256), counts, width=1.0, color=color, alpha=0.85)
        ax.axhline(len(data) / 256, color='#e74c3c', linewidth=1)
        ax.set_xlim(0, 255)
        ax.set_title(title, fontsize=11)

    def plot_rates(self, ax, names, rates, title, colors=None, unit='calls/s'):
        """Horizontal bars, fastest on top, each labelled with its rate."""
        order = np.argsort(rates)
        names = [names[i] for i in order]
        rates = [rates[i] for i in order]
        if colors is None:
            colors = plt.cm.viridis(np.linspace(0.2, 0.9, len(names)))
        else:
            colors = [colors[i] for i in order]
        bars = ax.barh(range(len(names)), rates, color=colors, alpha=0.85)
        ax.set_yticks(range(len(names)))
        ax.set_yticklabels(names, fontsize=9)
        ax.set_xlabel(unit)
        ax.set_title(title, fontsize=11)
        for bar, rate in zip(bars, rates):
            ax.text(bar.get_width(), bar.get_y() + bar.get_height() / 2,
                    f" {rate:,.0f}", ha='left', va='center', fontsize=8,
                    color='white')

    def save(self, fig, name=None, out_dir=None):
        """Save figure to figures/ (or out_dir)."""
        name = name or self.name.lower().replace(' ', '_')
        fig_dir = Path(out_dir) if out_dir else self.fig_dir
        fig_dir.mkdir(parents=True, exist_ok=True)
        out = fig_dir / f"{name}.png"
        fig.savefig(out, dpi=120, facecolor='#181818')
        plt.close(fig)
        print(f"\nFigure saved: {out}")
        return out

    # ----------------------------------------------------------
    # Summary printer
    # ----------------------------------------------------------
    def print_summary(self, results):
        """Print a standardized summary.

        results: {source name: metrics dict from collect()}
        """
        print("\n" + "=" * 72)
        print("SUMMARY")
        print("=" * 72)
        header = "".join(f"{m:>13s}" for m in self.metric_names)
        print(f"{'Source':<26s}{header}  verdict")
        for name, metrics in results.items():
            row = "".join(
                f"{np.mean(metrics[m]) if metrics[m] else float('nan'):>13.4f}"
                for m in self.metric_names)
            print(f"{name:<26s}{row}  {self.verdict(metrics)}")


class _Timer:
    """Simple timing context manager."""
    def __init__(self, label):
        self.label = label

    def __enter__(self):
        self.t0 = time.perf_counter()
        print(f"  {self.label}...", end=" ", flush=True)
        return self

    def __exit__(self, *args):
        elapsed = time.perf_counter() - self.t0
        print(f"{elapsed:.3f}s")
        self.elapsed = elapsed
