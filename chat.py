"""
chat.py

Send the fixed system + user conversation to the chat model and print the reply.
"""

import sys

from moviesearch.errors import MovieSearchError
from moviesearch.llm_manager import ask_default_question
from moviesearch.logging_setup import configure_logging


def main():
    configure_logging()
    try:
        answer = ask_default_question()
    except MovieSearchError as e:
        print(f"[chat] {e}")
        sys.exit(1)
    print(answer)


if __name__ == "__main__":
    main()
