# Import main lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from fixit.cli.main import main
        return main
    if name == "AppState":
        from fixit.state import AppState
        return AppState
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
