"""Package entry point for ``python -m reaction_translator``.

HOW: Delegates to the server's main(), which loads settings from the
environment and runs the FastAPI app with uvicorn.
"""

from reaction_translator.server.app import main

if __name__ == "__main__":
    main()
