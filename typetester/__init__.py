"""TypeTester API: typing-test results and per-user statistics."""
