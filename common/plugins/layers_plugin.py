import pytest

LAYERS = ("unit", "contract", "integration", "e2e")


# Hook 1: 注册分层标记
def pytest_configure(config):
    """配置pytest，注册用例分层标记"""
    config.addinivalue_line("markers", "unit: 单元测试，纯函数与模型")
    config.addinivalue_line("markers", "contract: 契约测试，数据结构形状")
    config.addinivalue_line("markers", "integration: 集成测试，计算器与查询协作")
    config.addinivalue_line("markers", "e2e: 端到端测试，从加购到展示")
    config.addinivalue_line("markers", "slow: 慢测试，生产环境跳过")


# Hook 2: 自定义测试发现后的处理
def pytest_collection_modifyitems(config, items):
    """修改收集到的测试项，根据环境和标记进行过滤"""
    env = config.getoption("--env")
    # 生产环境跳过慢测试
    if env == "prod":
        for item in items:
            if item.get_closest_marker("slow") is not None:
                item.add_marker(pytest.mark.skip(reason="生产环境跳过慢测试"))

    # 按标记对测试排序
    def item_priority(item):
        markers = [m.name for m in item.iter_markers()]
        for rank, layer in enumerate(LAYERS):
            if layer in markers:
                return rank
        return len(LAYERS)

    items.sort(key=item_priority)


# Hook 3: 自定义终端输出摘要
def pytest_terminal_summary(terminalreporter, exitstatus):
    """自定义测试结束后的输出摘要"""
    terminalreporter.write_sep("=", "自定义摘要: 用例统计")
    counts = terminalreporter.stats
    passed = len(counts.get("passed", []))
    failed = len(counts.get("failed", []))
    skipped = len(counts.get("skipped", []))
    terminalreporter.write_line(f"通过: {passed}  失败: {failed}  跳过: {skipped}")
