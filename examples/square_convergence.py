"""Square Topology -- distance vectors converging round by round.

Demonstrates building a World, relaxing it to a fixed point, reading the
explanation trace, and reconverging after a link degrades.
"""

from dvsim import ConvergenceLoop, World
from dvsim.presentation import format_world_text, render_formula
from dvsim.verification import verify_converged

# =============================================================
# Build the square with a B-D diagonal
# =============================================================
print("=== 4-Router Square ===")

world = World.new(["A", "B", "C", "D"])
mutation = world.apply([
    world.resolve_edge("A", "B", 2),
    world.resolve_edge("B", "C", 7),
    world.resolve_edge("C", "D", 4),
    world.resolve_edge("A", "D", 8),
    world.resolve_edge("B", "D", 9),
])
print(f"Pending after mutation: {sorted(mutation.world.pending)}")
print(format_world_text(mutation.world))

# =============================================================
# Run to the fixed point, printing every changed entry
# =============================================================
print("\n=== Convergence ===")

names = mutation.world.node_names()
result = ConvergenceLoop().run(mutation.world)
for round_result in result.rounds:
    changed = [names[i] for i in sorted(round_result.changed)]
    print(f"t={round_result.generation}: changed {changed}")
    for entry in round_result.trace.changed_entries():
        print(f"  {render_formula(entry, names)}")

stable = result.world
print(f"\nStable at t={stable.generation} after {result.changing_rounds} changing round(s)")
print(f"A->D: {stable.cost('A', 'D')} ({stable.entry('A', 'D')!r})")
print(verify_converged(stable).summary())

# =============================================================
# Degrade the diagonal and reconverge
# =============================================================
print("\n=== B-D: 9 -> 80 ===")

degraded = stable.apply([stable.resolve_edge("B", "D", 80)])
final = ConvergenceLoop().run(degraded.world).world
for source in ("A", "B"):
    cost, hop = final.routing_table(source)["D"]
    print(f"{source}->D: {cost} via {hop}")

print(f"\nStable at t={final.generation}")
print(verify_converged(final).summary())
