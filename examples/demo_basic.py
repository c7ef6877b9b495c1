#!/usr/bin/env python3
"""
Basic PID Loop Demo

Demonstrates:
- Two controllers simulated side by side
- Auto-tuning one of them
- A disturbance applied mid-run
- Response analysis
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pid_sim.core.pid_controller import create_controller
from pid_sim.core.pid_params import ControllerType
from pid_sim.simulation.simulator import Simulator


def main():
    print("=" * 60)
    print("Basic PID Loop Demo")
    print("=" * 60)

    sim = Simulator([
        create_controller("PID 1", kp=1.0, mode=ControllerType.P),
        create_controller("PID 2", kp=1.0, mode=ControllerType.PID),
    ])

    gains = sim.auto_tune("PID 2")
    print(f"\nAuto-tuned PID 2: {gains.to_dict()}")

    sim.setpoint = 1.0
    sim.start()

    # Stand-in for a display refresh loop
    while sim.on_frame():
        if sim.tick_count == 60:
            sim.disturbance = 0.02
        if sim.tick_count >= 120:
            sim.pause()

    print(f"Simulated {sim.tick_count} ticks, t = {sim.time:.1f}")

    print("\n" + "=" * 60)
    print("Analysis Results")
    print("=" * 60)

    for name, result in sim.analyze_all().items():
        sse = result.steady_state_error
        settling = result.settling_time
        print(f"\n{name}:")
        print(f"  Current Output: {result.current_value:.4f}")
        print(f"  Steady-state Error: {'N/A' if sse is None else f'{sse:.4f}'}")
        print(f"  Overshoot: {result.overshoot:.4f}")
        print(f"  Settling Time: {'N/A' if settling is None else f'{settling:.2f}s'}")


if __name__ == "__main__":
    main()
