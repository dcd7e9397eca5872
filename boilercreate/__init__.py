"""Boilercreate -- backend project skeleton generator.

Turns a selection of framework, libraries, middleware, services and tooling
toggles into a ready-to-run Express project: folder tree, source modules,
entry point, ``package.json`` and the install commands for the chosen
package manager.
"""

__version__ = "1.0.0"
