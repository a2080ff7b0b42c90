"""
Energy & corner diagnostic — does the arena keep the balls moving?

For both start styles, run the headless session and track:
  1. Total kinetic energy (elastic walls + balls → should stay flat,
     except where corner ejection injects speed)
  2. Total momentum magnitude (walls break conservation, shown for reference)
  3. Corner ejections per frame, and which corners fire
"""
import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

import physics as P
from physics.config import DemoConfig
from physics.engine import generate_run, ArenaConfig
from physics.metrics import relative_drift, corner_counts


def analyze(n_frames: int = 3600, seed: int = 7):
    os.makedirs('results/plots', exist_ok=True)
    runs = {}
    for style in ('new', 'old'):
        runs[style] = generate_run(DemoConfig(start_style=style), n_frames=n_frames,
                                   config=ArenaConfig(seed=seed))

    print(f"\n{'='*60}")
    print(f"ENERGY & CORNER DIAGNOSTIC — {n_frames} frames at {1 / P.DT:.0f} Hz")
    print(f"{'='*60}")
    for style, run in runs.items():
        counts = corner_counts(run['ejection_log'])
        print(f"\nstyle={style}")
        print(f"  energy start/end: {run['energy'][0]:.3f} / {run['energy'][-1]:.3f}")
        print(f"  max relative energy drift: {relative_drift(run['energy']):.4f}")
        print(f"  corner ejections: {int(run['ejections'].sum())}  {counts}")

    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    fig.suptitle('Arena diagnostic', fontsize=14, fontweight='bold')
    t = np.arange(n_frames + 1) * P.DT
    colors = {'new': '#3498db', 'old': '#e74c3c'}

    ax = axes[0]
    for style, run in runs.items():
        ax.plot(t, run['energy'], color=colors[style], label=style)
    ax.set_xlabel('time (s)')
    ax.set_ylabel('kinetic energy')
    ax.set_title('Total Kinetic Energy')
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    for style, run in runs.items():
        ax.plot(t, np.linalg.norm(run['momentum'], axis=1), color=colors[style], label=style)
    ax.set_xlabel('time (s)')
    ax.set_ylabel('|p|')
    ax.set_title('Total Momentum')
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[2]
    for style, run in runs.items():
        ax.plot(t, np.cumsum(run['ejections']), color=colors[style], label=style)
    ax.set_xlabel('time (s)')
    ax.set_ylabel('cumulative ejections')
    ax.set_title('Corner Ejections')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig('results/plots/energy_corner.png', dpi=150)
    plt.close()
    print(f"\nPlot saved: results/plots/energy_corner.png")


if __name__ == "__main__":
    analyze()
