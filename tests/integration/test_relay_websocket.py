from fastapi import status


def register(ws, uid):
    ws.send_json({"command": "register", "uid": uid})
    return ws.receive_json()


class TestRelayWebSocket:
    """실제 WebSocket 연결을 통한 릴레이 테스트"""

    def test_register_ack(self, sync_client):
        with sync_client.websocket_connect("/") as ws:
            assert register(ws, "X") == {"command": "registered", "from": "Server"}

    def test_messages_before_register_are_ignored(self, sync_client, test_app):
        """등록 전 메시지에는 응답하지 않고 연결은 유지"""
        with sync_client.websocket_connect("/") as ws:
            ws.send_text("garbage")
            ws.send_json({"command": "message", "target": "Y", "text": "hi"})
            ws.send_json({"command": "register"})

            # 첫 응답이 등록 응답이어야 함
            assert register(ws, "X") == {"command": "registered", "from": "Server"}
            assert test_app.state.connection_manager.is_user_connected("X") is True

    def test_relay_message_to_registered_target(self, sync_client):
        with sync_client.websocket_connect("/") as y, sync_client.websocket_connect("/") as x:
            register(y, "Y")
            register(x, "X")

            x.send_json({"command": "message", "target": "Y", "text": "hi"})

            assert y.receive_json() == {"command": "message", "target": "Y", "text": "hi", "from": "X"}

    def test_unknown_command_is_not_forwarded(self, sync_client):
        with sync_client.websocket_connect("/") as y, sync_client.websocket_connect("/") as x:
            register(y, "Y")
            register(x, "X")

            x.send_json({"command": "foo", "target": "Y"})
            x.send_json({"command": "foo"})
            x.send_text("{broken")
            x.send_json({"command": "theme", "target": "Y", "theme": 3})

            # 무시된 메시지 다음의 유효한 메시지가 첫 수신이어야 함
            assert y.receive_json() == {"command": "theme", "target": "Y", "theme": 3, "from": "X"}

    def test_new_registration_receives_messages(self, sync_client, test_app):
        """같은 ID로 재등록하면 새 연결만 메시지를 받음"""
        manager = test_app.state.connection_manager

        with sync_client.websocket_connect("/") as old, \
                sync_client.websocket_connect("/") as new, \
                sync_client.websocket_connect("/") as sender:
            register(old, "X")
            superseded = manager.get_connection("X")
            delivered_to_old = []
            deliver = superseded.send_text

            async def recording_send_text(data):
                delivered_to_old.append(data)
                await deliver(data)

            superseded.send_text = recording_send_text

            register(new, "X")
            register(sender, "S")

            sender.send_json({"command": "notification", "target": "X", "message": "hello"})

            assert new.receive_json() == {
                "command": "notification", "target": "X", "message": "hello", "from": "S"
            }
            assert manager.get_connection("X") is not superseded
            assert delivered_to_old == []

    def test_friend_request_pushes_notification(self, sync_client):
        """HTTP 친구 요청이 접속 중인 대상에게 알림으로 전달"""
        with sync_client.websocket_connect("/") as b:
            register(b, "B")

            response = sync_client.post("/frienduser", json={"uid": "B"}, headers={"x-uid": "A"})
            assert response.status_code == status.HTTP_200_OK

            notification = b.receive_json()
            assert notification["command"] == "notification"
            assert notification["from"] == "Server"
            assert notification["message"].endswith("You have a new friend request.")
            assert notification["time"] == 5000

    def test_lifespan_creates_documents(self, sync_client):
        response = sync_client.get("/serverdata")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["menu-version"] == "8.5.1"
