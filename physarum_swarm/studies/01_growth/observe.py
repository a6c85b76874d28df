"""
Study 01: Growth Observation

Run: python -m physarum_swarm.studies.01_growth.observe

Scatter a colony on an empty dish and watch the network grow.
Press r to reset, s to save a snapshot.
"""

import argparse
import logging
from typing import Optional

from physarum_swarm.core.config import SimulationConfig
from physarum_swarm.environments.slime_field import SlimeField
from physarum_swarm.observations.visualize import FieldVisualizer

logging.basicConfig(level=logging.INFO)


def run_study(
    steps: int = 1000,
    agents: Optional[int] = None,
    seed: Optional[int] = None,
    config_path: Optional[str] = None,
    animate: bool = True,
    snapshot: Optional[str] = None
) -> SlimeField:
    """
    Observe a colony growing.

    Watch:
    - Early noise sharpening into trails
    - Trails merging into a network
    - Edge artifacts where sensing stops but diffusion wraps
    """
    print("=" * 50)
    print("Study 01: Growth Observation")
    print("=" * 50)
    print("\nPrinciple: The trail is the message")
    print("-" * 50)

    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if agents is not None:
        config = config.replace(agent_count=agents)

    sim = SlimeField(config, seed=seed)
    print(f"\nDish created: {sim}")
    print(f"Config: decay={config.decay}, deposit={config.deposit_amount}, "
          f"speed={config.speed}")
    print(f"\nRunning {steps} steps...")

    if animate:
        viz = FieldVisualizer(sim)
        viz.bind_keys()

        try:
            for i in range(steps):
                sim.step()
                viz.render()

                if i % 100 == 0:
                    _report(sim)

            if snapshot:
                viz.save_frame(snapshot)
        finally:
            viz.close()
    else:
        for i in range(steps):
            sim.step()

            if i % 100 == 0:
                _report(sim)

        if snapshot:
            FieldVisualizer(sim).save_frame(snapshot)

    # Analysis
    stats = sim.field_stats()
    print("\n" + "=" * 50)
    print("Observations")
    print("=" * 50)
    print(f"\nTotal pheromone: {stats['total']:.2f}")
    print(f"Peak cell: {stats['max']:.3f}")
    print(f"Mean cell: {stats['mean']:.4f}")
    print(f"Covered cells: {100 * stats['coverage']:.1f}%")

    print("\n" + "=" * 50)
    print("Study complete. What did you observe?")
    print("=" * 50)
    return sim


def _report(sim: SlimeField) -> None:
    stats = sim.field_stats()
    print(f"  Step {sim.time}: total={stats['total']:.1f}, "
          f"max={stats['max']:.3f}")


def main():
    parser = argparse.ArgumentParser(description="Slime Field Growth Study")
    parser.add_argument("--steps", type=int, default=1000, help="Simulation steps")
    parser.add_argument("--agents", type=int, default=None, help="Number of organisms")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--no-animate", action="store_true", help="Disable animation")
    parser.add_argument("--snapshot", type=str, default=None, help="Save final frame here")
    args = parser.parse_args()

    run_study(
        steps=args.steps,
        agents=args.agents,
        seed=args.seed,
        config_path=args.config,
        animate=not args.no_animate,
        snapshot=args.snapshot
    )


if __name__ == "__main__":
    main()
