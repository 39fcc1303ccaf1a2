"""
The `packaging` sub-package contains modules related to assembling the
distribution directory of an npm package.

This includes:
- Selecting the non-source files that ship with the package.
- Rewriting package.json so its entry points resolve from the output directory.
- Orchestrating a full run, from build steps to `npm publish`.
"""
