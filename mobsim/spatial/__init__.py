"""Grid coordinates and the per-generation field.

Import ``Field`` from ``mobsim.spatial.field`` and ``Location`` from
``mobsim.spatial.location``; this package stays import-light because the
entity modules depend on ``Location``.
"""
