import pytest

from dispatchr import (
    DispatchError,
    Dispatcher,
    DispatcherOptions,
    StoreInterface,
    StoreNotRegisteredError,
)
from dispatchr.core.action import Action


class Cart:
    def __init__(self, dispatcher):
        self.dispatcher = dispatcher
        self.items = []

    def add_item(self, payload):
        self.items.append(payload["sku"])

    def dehydrate(self):
        return {"items": list(self.items)}

    def rehydrate(self, state):
        self.items = list(state["items"])

    handlers = {"ADD_ITEM": "add_item"}


class Totals:
    store_name = "Totals"

    def __init__(self, dispatcher):
        self.dispatcher = dispatcher
        self.count = 0

    def on_add(self, payload):
        self.dispatcher.wait_for(Cart)
        self.count = len(self.dispatcher.get_store("Cart").items)

    handlers = {"ADD_ITEM": on_add}


class Recorder:
    def __init__(self, dispatcher):
        self.dispatcher = dispatcher
        self.seen = []

    def record(self, payload):
        self.seen.append(payload)

    handlers = {"default": "record"}


@pytest.fixture
def context():
    d = Dispatcher(DispatcherOptions(stores=[Totals, Cart, Recorder]))
    return d.create_context({"request_id": "r1"})


def test_get_store_is_lazy_and_cached(context):
    assert context.store_instances == {}
    cart = context.get_store("Cart")
    assert isinstance(cart, Cart)
    assert context.get_store(Cart) is cart
    assert isinstance(cart.dispatcher, StoreInterface)
    assert cart.dispatcher.get_context() == {"request_id": "r1"}


def test_get_store_unknown(context):
    with pytest.raises(StoreNotRegisteredError):
        context.get_store("Missing")


def test_contexts_do_not_share_instances():
    d = Dispatcher(DispatcherOptions(stores=[Cart]))
    first = d.create_context(1)
    second = d.create_context(2)
    assert first.get_store("Cart") is not second.get_store("Cart")


def test_dispatch_runs_handlers_and_wait_for(context):
    context.dispatch("ADD_ITEM", {"sku": "x1"})
    context.dispatch("ADD_ITEM", {"sku": "x2"})
    assert context.get_store("Cart").items == ["x1", "x2"]
    assert context.get_store("Totals").count == 2
    assert context.current_action is None


def test_dispatch_falls_back_to_default(context):
    context.dispatch("UNKNOWN", {"n": 1})
    assert context.get_store("Recorder").seen == [{"n": 1}]
    context.dispatch("ADD_ITEM", {"sku": "x"})
    assert context.get_store("Recorder").seen == [{"n": 1}]


def test_dispatch_requires_action_name(context):
    with pytest.raises(DispatchError):
        context.dispatch("", {})


def test_nested_dispatch_is_rejected():
    class Loop:
        def __init__(self, dispatcher):
            self.context = None

        handlers = {"PING": lambda store, payload: payload.dispatch("PONG")}

    d = Dispatcher(DispatcherOptions(stores=[Loop]))
    ctx = d.create_context()
    with pytest.raises(DispatchError, match="PING"):
        ctx.dispatch("PING", ctx)
    assert ctx.current_action is None


def test_handler_exception_propagates_and_clears_action():
    class Boom:
        def __init__(self, dispatcher):
            pass

        def explode(self, payload):
            raise ValueError("boom")

        handlers = {"GO": "explode"}

    ctx = Dispatcher(DispatcherOptions(stores=[Boom])).create_context()
    with pytest.raises(ValueError, match="boom"):
        ctx.dispatch("GO")
    assert ctx.current_action is None


def test_missing_handler_method():
    class Typo:
        def __init__(self, dispatcher):
            pass

        handlers = {"GO": "does_not_exist"}

    ctx = Dispatcher(DispatcherOptions(stores=[Typo])).create_context()
    with pytest.raises(DispatchError, match="does_not_exist"):
        ctx.dispatch("GO")


def test_wait_for_outside_dispatch(context):
    with pytest.raises(DispatchError):
        context.wait_for("Cart")


def test_wait_for_callback_runs_after_dependencies():
    order = []

    class First:
        def __init__(self, dispatcher):
            self.dispatcher = dispatcher

        def go(self, payload):
            self.dispatcher.wait_for(["Second"], lambda: order.append("callback"))
            order.append("First")

        handlers = {"GO": "go"}

    class Second:
        def __init__(self, dispatcher):
            pass

        def go(self, payload):
            order.append("Second")

        handlers = {"GO": "go"}

    ctx = Dispatcher(DispatcherOptions(stores=[First, Second])).create_context()
    ctx.dispatch("GO")
    assert order == ["Second", "callback", "First"]


def test_dehydrate_and_rehydrate(context):
    context.dispatch("ADD_ITEM", {"sku": "x1"})
    state = context.dehydrate()
    assert state == {"stores": {"Cart": {"items": ["x1"]}}}

    fresh = context.dispatcher.create_context()
    fresh.rehydrate(state)
    assert fresh.get_store("Cart").items == ["x1"]


def test_rehydrate_unknown_store(context):
    with pytest.raises(StoreNotRegisteredError):
        context.rehydrate({"stores": {"Ghost": {}}})


def test_unknown_action_with_empty_default_is_noop():
    d = Dispatcher(DispatcherOptions(stores=[Cart]))
    ctx = d.create_context()
    ctx.dispatch("UNKNOWN", {"sku": "x"})
    assert ctx.store_instances == {}
    assert ctx.current_action is None
    assert "UNKNOWN" not in d.handlers


def test_factory_store_returning_none_is_cached():
    calls = []

    def empty_store(dispatcher):
        calls.append(dispatcher)
        return None

    ctx = Dispatcher(DispatcherOptions(stores=[empty_store])).create_context()
    assert ctx.get_store("empty_store") is None
    assert ctx.get_store(empty_store) is None
    assert len(calls) == 1


def test_action_handler_call_requires_execution():
    action = Action("GO")
    with pytest.raises(DispatchError):
        action._call_handler("Cart")
