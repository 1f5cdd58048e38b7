"""User-facing message configuration.

Every text the bot sends lives here so deployments can reword replies
without touching handlers.
"""

from pydantic import BaseModel, Field


class ConditionImage(BaseModel):
    """Image attached to a weather report for one weather category."""

    name: str
    content_url: str
    content_type: str = "image/png"


def _default_condition_images() -> dict[str, ConditionImage]:
    return {
        "Clouds": ConditionImage(
            name="clouds",
            content_url="https://upload.wikimedia.org/wikipedia/commons/4/40/Draw_cloudy.png",
        ),
        "Rain": ConditionImage(
            name="rain",
            content_url=(
                "https://www.seekpng.com/png/detail/"
                "181-1815963_rain-emoji-png-png-stock-cloud-rain-clipart.png"
            ),
        ),
        "Clear": ConditionImage(
            name="clear",
            content_url="https://upload.wikimedia.org/wikipedia/commons/9/92/Draw_sunny.png",
        ),
    }


class ResponsesConfig(BaseModel):
    """Templates for bot replies."""

    welcome: str = Field(
        default="Welcome to the {city} Weather Bot!  Ask me about the weather over the next 5 days."
    )
    fallback: str = "I didn't understand what you just said to me."
    weather_today: str = "The weather for today is showing that there should be {description}."
    weather_on_day: str = "The weather for {day} is showing that there should be {description}."
    temperature: str = "The temperature should be around {temperature} degrees fahrenheit."
    forecast_unavailable: str = "Sorry, I can only give you the weather for the next 5 days."
    cancelled: str = "Ok.  I've cancelled our last activity."
    nothing_to_cancel: str = "I don't have anything to cancel."
    help: list[str] = Field(
        default_factory=lambda: [
            "Let me try to provide some help.",
            "I can give you weather predictions for the next 5 days, just ask me the name of the day!",
            "I also understand greetings, being asked for help, or being asked to cancel what I am doing.",
        ]
    )
    turn_error: str = "The bot encountered an error or bug."
    condition_images: dict[str, ConditionImage] = Field(default_factory=_default_condition_images)
