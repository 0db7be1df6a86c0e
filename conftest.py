pytest_plugins = ["mockwrighttest.plugin"]
