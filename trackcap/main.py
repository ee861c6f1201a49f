import json
from pathlib import Path

from trackcap.core.config import CapacityConfig
from trackcap.logging_config import configure_logging
from trackcap.sim.scenario import route_from_payload, run_route
from trackcap.sim.simulator import summarize_capacity, capacity_reserve

DATA_DIR = Path(__file__).parent / "data"


def load_route():
    payload = json.loads((DATA_DIR / "sample_route.json").read_text())
    return route_from_payload(payload)


if __name__ == "__main__":
    config = CapacityConfig()
    configure_logging(config.log_level)
    gp, route = load_route()
    gp = gp or config.general_parameters()

    result = run_route(route, gp)
    required, used = result["required"], result["used"]

    print("Required:", summarize_capacity(required.total))
    print("Used:", summarize_capacity(used.total))
    print("Reserve:", capacity_reserve(required.total, used.total))
    if required.failed_sections:
        print("Failed sections:", ", ".join(required.failed_sections))
    print("Per section:")
    for sid, cap in required.by_section.items():
        print(f"  {sid}: {summarize_capacity(cap)}")
