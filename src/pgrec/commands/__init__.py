"""pgrec CLI commands."""

from pgrec.commands.recommend import app as recommend_app
from pgrec.commands.params import app as params_app

__all__ = ["recommend_app", "params_app"]
