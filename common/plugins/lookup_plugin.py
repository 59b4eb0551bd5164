import asyncio
from decimal import Decimal

import pytest

from shopcalc.service import CartTotalCalculator


# 自定义命令行参数
def pytest_addoption(parser):
    """添加桩查询相关的命令行参数"""
    group = parser.getgroup("lookup_plugin", "查询桩选项")
    group.addoption(
        "--lookup-delay",
        action="store",
        type=float,
        default=0.0,
        help="桩查询在返回前等待的秒数，用于模拟网络延迟"
    )


class RecordingLookups:
    """可记录调用顺序的成本/运费查询桩"""

    def __init__(self, delay: float):
        self.delay = delay
        self.cost = Decimal("20")
        self.shipping = Decimal("5")
        self.fail_stage = None
        self.events = []
        self.snapshots = []

    async def _answer(self, stage, cart, value):
        self.events.append(f"{stage}:start")
        self.snapshots.append((stage, [i.name for i in cart.items]))
        await asyncio.sleep(self.delay)
        if self.fail_stage == stage:
            self.events.append(f"{stage}:error")
            raise ConnectionError(f"{stage} service unavailable")
        self.events.append(f"{stage}:done")
        return value

    async def cost_lookup(self, cart):
        return await self._answer("cost", cart, self.cost)

    async def shipping_lookup(self, cart):
        return await self._answer("shipping", cart, self.shipping)


class RecordingSink:
    def __init__(self):
        self.totals = []

    def __call__(self, total):
        self.totals.append(total)


@pytest.fixture(scope="session")
def lookup_delay(pytestconfig):
    return pytestconfig.getoption("--lookup-delay")


@pytest.fixture(scope="function")
def lookup_stubs(lookup_delay):
    stubs = RecordingLookups(lookup_delay)
    yield stubs
    # 清理调用记录
    stubs.events.clear()
    stubs.snapshots.clear()


@pytest.fixture(scope="function")
def display_sink():
    return RecordingSink()


@pytest.fixture(scope="function")
def calculator(lookup_stubs, display_sink):
    """桩查询 + 记录型展示端组装出的计算器"""
    return CartTotalCalculator(
        cost_lookup=lookup_stubs.cost_lookup,
        shipping_lookup=lookup_stubs.shipping_lookup,
        sink=display_sink,
    )
