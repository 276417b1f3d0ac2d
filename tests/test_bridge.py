import threading
import time


def make_bridge():
    from pushrelay.services.bridge import MessageBridge

    return MessageBridge()


def test_bridge_forwards_callbacks(qapp):
    bridge = make_bridge()
    messages, tokens, errors = [], [], []
    bridge.message_received.connect(messages.append)
    bridge.token_received.connect(tokens.append)
    bridge.error_occurred.connect(errors.append)

    payload = {"notification": {"title": "Order Ready", "body": "Your order #42 is ready"}}
    bridge.on_message(payload)
    bridge.on_token("tok-1")
    bridge.on_error(ConnectionError("checkin refused"))
    bridge.on_error(ValueError())

    assert messages == [payload]
    assert tokens == ["tok-1"]
    assert errors == ["checkin refused", "ValueError"]


def test_bridge_delivers_on_main_thread(qapp):
    bridge = make_bridge()
    seen = []
    bridge.message_received.connect(lambda payload: seen.append((payload, threading.get_ident())))

    worker = threading.Thread(target=bridge.on_message, args=({"n": 1},))
    worker.start()
    worker.join()

    deadline = time.monotonic() + 5
    while not seen and time.monotonic() < deadline:
        qapp.processEvents()
        time.sleep(0.01)
    assert seen == [({"n": 1}, threading.get_ident())]
