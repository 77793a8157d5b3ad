"""
Single-day solar report.

Simulates the reference household for one date of the irradiance dataset,
prints the day summary and optimization tips, and saves a power-flow and
state-of-charge figure.
"""

import argparse
import logging
import sys

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .appliances import REFERENCE_APPLIANCES  # noqa: E402
from .exceptions import SolarMonitorError  # noqa: E402
from .irradiance import load_irradiance, samples_for_date  # noqa: E402
from .load_estimator import default_rng  # noqa: E402
from .settings import REFERENCE_SYSTEM  # noqa: E402
from .simulation import simulate_day, summarize_day  # noqa: E402
from .tips import applicable_tips, build_tip_catalog  # noqa: E402

logger = logging.getLogger(__name__)


def plot_day(records, system, title, output):
    hours = [r.hour for r in records]
    plt.figure(figsize=(15, 8))
    plt.subplot(2, 1, 1)
    plt.plot(hours, [r.solar_kw for r in records], "y-", label="Solar Generation")
    plt.plot(hours, [r.load_kw for r in records], "b-", label="Household Load")
    plt.ylabel("kW")
    plt.legend()
    plt.grid(True)
    plt.title(f"Power Flow\n({title})")
    plt.subplot(2, 1, 2)
    plt.plot(hours, [r.soc for r in records], "g-", label="SOC")
    plt.axhline(system.min_soc_kwh, color="r", linestyle="--", label="Minimum SOC")
    plt.axhline(system.battery_capacity_kwh, color="k", linestyle=":", label="Capacity")
    plt.ylabel("Battery SOC (kWh)")
    plt.xlabel("Hour of Day")
    plt.legend()
    plt.grid(True)
    plt.title("Battery State of Charge")
    plt.tight_layout()
    plt.savefig(output)
    plt.close()


def build_report(records, system):
    summary = summarize_day(records, system)
    tips = applicable_tips(records, build_tip_catalog(system, include_fallback=True))
    lines = [f"{k}: {v:.2f}" if isinstance(v, float) else f"{k}: {v}" for k, v in summary.items()]
    lines.append("")
    lines.append("Optimization tips:")
    for tip in tips:
        lines.append(f"- [{tip.category.value}] {tip.title}: {tip.description}")
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("dataset", help="irradiance dataset (JSON)")
    parser.add_argument("date", help="date to simulate, YYYY-MM-DD")
    parser.add_argument("--output", default="single_day_powerflow.png", help="figure path")
    parser.add_argument("--seed", type=int, default=None, help="load jitter seed")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-5s | %(name)s - %(message)s",
    )

    try:
        frame = load_irradiance(args.dataset)
        samples = samples_for_date(frame, args.date)
    except SolarMonitorError as e:
        logger.error("%s", e)
        return 1

    records = simulate_day(samples, REFERENCE_APPLIANCES, REFERENCE_SYSTEM, rng=default_rng(args.seed))
    print(f"=== {args.date} ===")
    print(build_report(records, REFERENCE_SYSTEM))
    plot_day(records, REFERENCE_SYSTEM, args.date, args.output)
    logger.info("Saved figure to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
