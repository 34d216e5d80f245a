"""Application Commands."""

from news_gateway.application.commands.ask_question_command import AskQuestionCommand
from news_gateway.application.commands.clear_state_command import ClearStateCommand
from news_gateway.application.commands.fetch_today_news_command import (
    FetchTodayNewsCommand,
)

__all__ = [
    "AskQuestionCommand",
    "ClearStateCommand",
    "FetchTodayNewsCommand",
]
