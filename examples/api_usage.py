"""Ordering tasks from Python.

Builds the same pipeline twice: once by wiring nodes directly and once through
a DependencyMap keyed by task name.
"""

import depsort as ds

# Wire nodes directly
fetch = ds.DependencyNode("fetch")
compile_ = ds.DependencyNode("compile")
lint = ds.DependencyNode("lint")
package = ds.DependencyNode("package")

compile_.add_dependency(fetch)
lint.add_dependency(fetch)
package.add_dependency(compile_)
package.add_dependency(lint)

analyzer = ds.DependencyAnalyzer()
result = analyzer.analyze([package, lint, compile_, fetch])
print("order:", result.ordered_values)
print("levels:", analyzer.levels())

# Same pipeline declared by key
tasks = ds.DependencyMap()
for name in ("fetch", "compile", "lint", "package"):
    tasks.add(name, name.upper())
tasks.add_dependency("compile", "fetch")
tasks.add_dependency("lint", "fetch")
tasks.add_dependent("compile", "package")
tasks.add_dependent("lint", "package")

# GraphAnalyzer consumes the edges it walks, so it gets its own fresh nodes
queue = ds.create_analyzer(ds.AnalyzerKind.QUEUE)
queue.analyze(tasks.dependency_nodes())
print("queue order:", queue.ordered_values)
print("queue groups:", queue.depth_groups())

# A cycle leaves the unresolved nodes in the result
tasks.add_dependency("fetch", "package")
result = ds.DependencyAnalyzer().analyze(tasks.dependency_nodes())
print("valid:", result.valid)
print("cycle:", [node.value for node in result.cycle_nodes])
try:
    result.raise_for_cycle()
except ds.CycleError as e:
    print(e)
