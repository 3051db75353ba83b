"""Anti-detection measures for browser sessions."""

from tpscraper.antibot.user_agents import UserAgentRotator
from tpscraper.antibot.headers import HeaderGenerator
from tpscraper.antibot.delays import DelayManager

__all__ = [
    "UserAgentRotator",
    "HeaderGenerator",
    "DelayManager",
]
