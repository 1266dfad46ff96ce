def main() -> None:
    """Entry point for the application: run the API server."""
    from portfolio_builder.api.main import main as api_main

    api_main()
