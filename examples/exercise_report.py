"""HTML Report -- one page per mutation and relaxation round.

Runs the 8-router exercise topology (C-F later degrades from 2 to 30) and
writes numbered HTML pages showing every node's table and the formula
behind each recomputed entry.
"""

import sys
from pathlib import Path

from dvsim.presentation import HtmlReport, ReportConfig
from dvsim.scenarios import EXERCISE, run_scenario
from dvsim.verification import verify_converged

output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("report")

# =============================================================
# Run the scenario with the report attached
# =============================================================
print(f"=== {EXERCISE.name}: {EXERCISE.description} ===")

report = HtmlReport(ReportConfig(output_dir=output_dir, prefix=EXERCISE.name))
run = run_scenario(
    EXERCISE,
    on_mutation=report.write_mutation,
    on_round=report.write_round,
)

for batch, convergence in zip(EXERCISE.batches, run.convergences):
    summary = convergence.get_summary()
    edges = ", ".join(f"{a}-{b}={w}" for a, b, w in batch)
    print(f"  [{len(batch)} edge(s)] {edges[:60]}")
    print(f"    t={summary['start_generation']} -> t={summary['final_generation']}, "
          f"{summary['changing_rounds']} changing round(s)")

# =============================================================
# Results
# =============================================================
print("\n=== Routing table of A ===")
for destination, (cost, hop) in run.final.routing_table("A").items():
    print(f"  {destination}: {cost} via {hop or '-'}")

print(f"\n{verify_converged(run.final).summary()}")
print(f"Wrote {len(report.pages)} page(s) to {output_dir}/")
