import json

from mobsim.config.simulation_config import FieldConfig, SimulationConfig
from mobsim.simulation.engine import Simulator


def _snapshot(simulator: Simulator) -> dict:
    """JSON-friendly state of the current field (mob ids are process-global, so left out)."""
    field = simulator.field
    return {
        "step": simulator.step,
        "environment": str(field.environment),
        "population": field.get_population_details(),
        "mobs": sorted(
            (str(m.species), m.location.row, m.location.col, m.age, m.food_level, m.diseased)
            for m in field.get_mobs()
        ),
        "grass": sorted(
            (p.location.row, p.location.col, p.is_seed) for p in field.get_plants()
        ),
    }


def _run(seed: int, steps: int = 30) -> list:
    config = SimulationConfig.headless_fast(seed=seed).with_overrides(
        field=FieldConfig(depth=24, width=32)
    )
    simulator = Simulator(config)
    snapshots = [_snapshot(simulator)]
    for _ in range(steps):
        if not simulator.is_viable():
            break
        simulator.simulate_one_step()
        snapshots.append(_snapshot(simulator))
    return snapshots


def test_simulation_seed_determinism():
    """Two runs with the same seed produce identical worlds at every step."""
    run1 = _run(12345)
    run2 = _run(12345)

    s1 = json.dumps(run1, sort_keys=True)
    s2 = json.dumps(run2, sort_keys=True)

    assert s1 == s2, f"Snapshots differ between seeded runs:\n{s1[:500]}...\nvs\n{s2[:500]}..."


def test_different_seeds_differ():
    assert _run(1, steps=0) != _run(2, steps=0)
