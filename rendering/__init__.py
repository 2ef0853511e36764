"""Optional pygame front end for the mob simulation.

Nothing in ``mobsim`` imports this package; it is only loaded when a run is
started with a window.
"""
