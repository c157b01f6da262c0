"""
Bar Sampling Demo

Feeds a short hand-made tick stream into M15, H1 and D1 samplers and prints
every bar as it closes, including gap-fill bars.
"""

from datetime import datetime

from core.models.tick import Tick
from core.sampling.factory import MultiTimeframeSampler
from core.utils.numeric import D


def create_sample_ticks():
    """Ticks spanning an overnight gap."""
    raw = [
        ("2024-03-04 09:01:12", "1.0950"),
        ("2024-03-04 09:07:45", "1.0958"),
        ("2024-03-04 09:14:59", "1.0944"),
        ("2024-03-04 09:15:00", "1.0947"),
        ("2024-03-04 10:02:30", "1.0961"),
        ("2024-03-04 16:44:10", "1.0939"),
        ("2024-03-05 08:00:00", "1.0972"),
    ]
    return [Tick(datetime.fromisoformat(ts), D(price)) for ts, price in raw]


def main():
    """Run demo."""
    print("Bar Sampling Demo")
    print("=" * 50)

    fan_out = MultiTimeframeSampler(["M15", "H1", "D1"])

    for tick in create_sample_ticks():
        print(f"\ntick {tick.timestamp}  {tick.price}")
        for code, result in fan_out.observe_tick(tick).items():
            kind = "gap-fill" if result.has_gap else "single"
            print(f"  {code} closed ({kind}, {len(result.bars)} bars)")
            for bar in result.bars:
                tag = " [empty]" if bar.is_empty else ""
                print(f"    [{bar.period_start} .. {bar.period_end})  "
                      f"O={bar.open} H={bar.high} L={bar.low} C={bar.close}{tag}")

    print("\nOpen periods:")
    for code, bar in fan_out.current_incomplete().items():
        print(f"  {code}: [{bar.period_start} .. {bar.period_end})  close={bar.close}")


if __name__ == "__main__":
    main()
