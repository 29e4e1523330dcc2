"""
Complete Evolution Example

Demonstrates a full bit-string evolution run driven from a YAML config.

Author: evobit developers
"""

from pathlib import Path

from evobit import EvolutionOrchestrator, load_config
from evobit.monitoring import configure_logging


def main():
    print("=" * 80)
    print("EVOBIT COMPLETE EVOLUTION EXAMPLE")
    print("=" * 80)
    print()

    # ==========================================================================
    # STEP 1: Load Configuration
    # ==========================================================================
    print("Step 1: Loading configuration...")

    config = load_config(Path(__file__).parent / "config.yaml")
    configure_logging(log_level=config.logging.level)
    evolution = config.evolution

    print(f"   Target: {''.join(str(bit) for bit in evolution.solution)}")
    print(f"   Population: {evolution.population_size} ({evolution.elite_count} survivors)")
    print(f"   Generations: {evolution.max_generation + 1}")
    print()

    # ==========================================================================
    # STEP 2: Evolve
    # ==========================================================================
    print("Step 2: Evolving...")

    orchestrator = EvolutionOrchestrator(evolution)
    result = orchestrator.run()
    print()

    # ==========================================================================
    # STEP 3: Results
    # ==========================================================================
    print("Step 3: Results")
    print(f"   Termination: {result.termination.value}")
    print(f"   Generation: {result.generation}")
    print(f"   Best genome: {result.fittest.bitstring()} (fitness {result.fittest.fitness})")

    summary = result.history.compute_summary()
    print(f"   Mutations applied: {summary['total_mutations']}")
    print(f"   Crossovers performed: {summary['total_crossovers']}")

    report = Path("evolution_history.json")
    result.history.export_to_json(report)
    print(f"   History written to {report}")


if __name__ == "__main__":
    main()
