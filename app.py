from llmproxy.app import app, main
from llmproxy.config import IS_VERCEL

__all__ = ["app"]


if __name__ == "__main__" and not IS_VERCEL:
    main()
