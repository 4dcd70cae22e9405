#!/usr/bin/env python3
"""
Example: Basic usage of untangle as a Python library
"""

from untangle import Dependency, Module, analyze, build_graph, get_layers

# Describe the project's modules and who depends on whom
graph = build_graph()
app, web, db, core = (Module(name, f"src/{name}") for name in ("app", "web", "db", "core"))
graph.add_dependency(Dependency(app, web))
graph.add_dependency(Dependency(app, db))
graph.add_dependency(Dependency(web, core, weight=3.0))
graph.add_dependency(Dependency(db, core))

# Reads ./untangle.toml and UNTANGLE_* variables; verbosity sets the log level
plan = analyze(graph)
print(plan)
print()

for step in plan.steps:
    deps = ", ".join(m.name for m in step.dependencies) or "-"
    print(f"{step.priority}. {step.module.name:<6} {step.complexity_level.value:<6} needs: {deps}")

for i, layer in enumerate(get_layers(graph) or [], 1):
    print(f"Wave {i}: {', '.join(sorted(m.name for m in layer))}")
