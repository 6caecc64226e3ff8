"""GUI-agnostic multipage core: geometry, discovery, state and services.

Front-ends depend on :mod:`multipage.core.host` for the editor contract and
on :class:`multipage.core.context.MultipageContext` for the wired services.
"""
