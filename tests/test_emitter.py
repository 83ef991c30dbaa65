"""
Tests for the ordered event emitter.
"""

from runtime.emitter import Emitter


class TestEmitter:
    def test_delivers_in_insertion_order(self):
        emitter = Emitter("test")
        calls = []
        emitter.add(lambda v: calls.append(("a", v)))
        emitter.add(lambda v: calls.append(("b", v)))

        emitter.notify(1)

        assert calls == [("a", 1), ("b", 1)]

    def test_duplicate_add_is_noop(self):
        emitter = Emitter()
        calls = []

        def listener():
            calls.append(1)

        emitter.add(listener)
        emitter.add(listener)
        emitter.notify()

        assert len(emitter) == 1
        assert calls == [1]

    def test_once_listener_removed_after_first_delivery(self):
        emitter = Emitter()
        calls = []
        emitter.once(lambda: calls.append(1))

        emitter.notify()
        emitter.notify()

        assert calls == [1]
        assert len(emitter) == 0

    def test_remove_and_has(self):
        emitter = Emitter()

        def listener():
            pass

        emitter.add(listener)
        assert emitter.has(listener)

        emitter.remove(listener)
        assert not emitter.has(listener)

        # Removing an unknown listener is harmless
        emitter.remove(listener)

    def test_listener_added_during_delivery_waits_for_next_round(self):
        emitter = Emitter()
        calls = []

        def late():
            calls.append("late")

        def first():
            calls.append("first")
            emitter.add(late)

        emitter.add(first)
        emitter.notify()
        assert calls == ["first"]

        emitter.notify()
        assert calls == ["first", "first", "late"]

    def test_failing_listener_does_not_stop_delivery(self, caplog):
        emitter = Emitter("fragile")
        calls = []

        def boom():
            raise RuntimeError("boom")

        emitter.add(boom)
        emitter.add(lambda: calls.append("after"))

        emitter.notify()

        assert calls == ["after"]
        assert "Listener error on fragile" in caplog.text

    def test_clear(self):
        emitter = Emitter()
        emitter.add(lambda: None)
        emitter.clear()
        assert len(emitter) == 0
