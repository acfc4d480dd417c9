from rest_framework import serializers

PRIORITY_CHOICES = ("high", "medium", "low")
DEFAULT_PRIORITY = "medium"

PRIORITY_MESSAGE = "Priority must be among high, medium, low. Default value is medium"


class TextField(serializers.CharField):
    """CharField that only takes JSON strings and stores them untrimmed.

    Whitespace-only values count as blank.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("trim_whitespace", False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        if not data.strip():
            self.fail("blank")
        return super().to_internal_value(data)


class StrictBooleanField(serializers.BooleanField):
    TRUE_VALUES = {True, "true", 1}
    FALSE_VALUES = {False, "false", 0}
    NULL_VALUES = {None}


def _required_text(label: str) -> dict:
    message = f"{label} is required"
    return {
        "required": message,
        "blank": message,
        "null": message,
        "invalid": f"{label} must be a string",
    }


class TaskInputSerializer(serializers.Serializer):
    """Body of POST /tasks and PUT /task/<id>."""
    title = TextField(error_messages=_required_text("Title"))
    description = TextField(error_messages=_required_text("Description"))
    completed = StrictBooleanField(
        required=False,
        error_messages={
            "invalid": "Completed must be a boolean",
            "null": "Completed must be a boolean",
        },
    )
    priority = serializers.ChoiceField(
        choices=PRIORITY_CHOICES,
        required=False,
        error_messages={"invalid_choice": PRIORITY_MESSAGE, "null": PRIORITY_MESSAGE},
    )
