"""Random route generator for capacity runs."""
import argparse, random, json, os, sys
from typing import List, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def build_direction(motion_type: str) -> Dict:
    return {
        "primary_motion_type": motion_type,
        "primary_heavy": {"qty": random.randint(0, 4), "removal_coefficient": 1},
        "primary": {"qty": random.randint(5, 40), "removal_coefficient": 1},
        "secondary": {"qty": random.randint(0, 8), "removal_coefficient": random.randint(1, 3)},
        "suburban": {"qty": random.randint(0, 12), "removal_coefficient": 1},
    }


def build_sections(n: int, fail_rate: float) -> List[Dict]:
    out: List[Dict] = []
    for i in range(n):
        motion_type = random.choice(["Cargo", "Passenger"])
        period = float(random.randint(8, 30))
        if random.random() < fail_rate:
            period = -1.0
        out.append({
            "id": f"S{i+1}",
            "period": period,
            "odd_routes_present": random.random() > 0.05,
            "even_routes_present": random.random() > 0.05,
            "odd": build_direction(motion_type),
            "even": build_direction(motion_type),
        })
    return out


def main():
    p = argparse.ArgumentParser()
    p.add_argument('-Sections', type=int, default=20)
    p.add_argument('-FailRate', type=float, default=0.0)
    p.add_argument('-Window', type=int, default=120)
    p.add_argument('-Seed', type=int, default=42)
    p.add_argument('-Out', type=str, default='large_route.json')
    a = p.parse_args()

    random.seed(a.Seed)
    route = {
        "general_parameters": {
            "window": a.Window,
            "alpha_s": 0.9,
            "alpha_t": 0.95,
            "alpha_u": 0.98,
            "expected_interval": 15,
        },
        "sections": build_sections(a.Sections, a.FailRate),
    }
    with open(a.Out, 'w') as f:
        json.dump(route, f, indent=2)
    print(f"Wrote {len(route['sections'])} sections -> {a.Out}")


if __name__ == '__main__':
    main()
