"""Tests for the activity schema."""

from weatherbot.core.activity import Activity, ActivityTypes, Attachment, DeliveryModes

WIRE_MESSAGE = {
    "type": "message",
    "id": "act-1",
    "channelId": "emulator",
    "serviceUrl": "http://localhost:50000",
    "from": {"id": "user-1", "name": "User"},
    "recipient": {"id": "bot-1", "name": "Bot"},
    "conversation": {"id": "conv-1"},
    "text": "what's the weather today",
    "entities": [{"type": "ClientCapabilities"}],
}


class TestActivityParsing:
    def test_parses_camel_case_wire_format(self):
        # Arrange & Act
        activity = Activity.model_validate(WIRE_MESSAGE)

        # Assert
        assert activity.type == ActivityTypes.MESSAGE
        assert activity.channel_id == "emulator"
        assert activity.service_url == "http://localhost:50000"
        assert activity.from_property.id == "user-1"
        assert activity.conversation.id == "conv-1"

    def test_conversation_update_members(self):
        # Arrange
        payload = {
            **WIRE_MESSAGE,
            "type": "conversationUpdate",
            "membersAdded": [{"id": "bot-1"}, {"id": "user-1"}],
        }

        # Act
        activity = Activity.model_validate(payload)

        # Assert
        assert [m.id for m in activity.members_added] == ["bot-1", "user-1"]

    def test_to_wire_uses_aliases_and_drops_nulls(self):
        # Arrange
        activity = Activity.create_message(
            attachments=[Attachment(content_type="image/png", content_url="http://img", name="rain")]
        )

        # Act
        wire = activity.to_wire()

        # Assert
        assert wire == {
            "type": "message",
            "attachments": [{"contentType": "image/png", "contentUrl": "http://img", "name": "rain"}],
        }


class TestReplyDefaults:
    def test_reply_is_addressed_back_to_sender(self):
        # Arrange
        incoming = Activity.model_validate(WIRE_MESSAGE)

        # Act
        reply = Activity.create_message("hi").apply_reply_defaults(incoming)

        # Assert
        assert reply.from_property.id == "bot-1"
        assert reply.recipient.id == "user-1"
        assert reply.conversation.id == "conv-1"
        assert reply.reply_to_id == "act-1"
        assert reply.timestamp is not None

    def test_trace_is_not_a_reply(self):
        incoming = Activity.model_validate(WIRE_MESSAGE)

        trace = Activity.create_trace("t", value="v").apply_reply_defaults(incoming)

        assert trace.type == ActivityTypes.TRACE
        assert trace.reply_to_id is None


class TestExpectsReplies:
    def test_expect_replies_delivery_mode(self):
        activity = Activity.model_validate(
            {**WIRE_MESSAGE, "deliveryMode": DeliveryModes.EXPECT_REPLIES.value}
        )
        assert activity.expects_replies()

    def test_missing_service_url(self):
        payload = {k: v for k, v in WIRE_MESSAGE.items() if k != "serviceUrl"}
        assert Activity.model_validate(payload).expects_replies()

    def test_normal_delivery(self):
        assert not Activity.model_validate(WIRE_MESSAGE).expects_replies()
