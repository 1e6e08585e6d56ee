import asyncio
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from core import categories, timeseries
from core.domain import FlowDirection, TimePeriod, Transaction


async def build_dashboard(
    trans: Iterable[Transaction],
    period: TimePeriod,
    direction: FlowDirection,
    reference_date: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Compute chart, pie and summaries for one snapshot concurrently.

    The snapshot is frozen into a tuple first and every task gets the same
    reference date, so the parts are consistent with each other.
    """
    snapshot = tuple(trans)
    ref = reference_date or datetime.now()

    async def run(key: str, fn, *args) -> tuple[str, Any]:
        await asyncio.sleep(0)  # cooperate
        return key, fn(snapshot, *args)

    results = await asyncio.gather(
        run("chart", timeseries.generate_chart_data, period, ref),
        run("totals", timeseries.summary_stats, period, ref),
        run("slices", categories.generate_pie_chart_data, direction, period, ref),
        run("categories", categories.summary_stats, direction, period, ref),
    )
    return {k: v for k, v in results}
