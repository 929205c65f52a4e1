from ballnav.object_counter import ObjectCounter


def test_counts_each_detection():
    counter = ObjectCounter()
    for _ in range(3):
        counter.detected("ball")
    counter.detected("robotFront")
    assert counter.count("ball") == 3
    assert counter.count("robotFront") == 1


def test_unknown_label_is_zero():
    assert ObjectCounter().count("robotBack") == 0


def test_reset_clears_all_counts():
    counter = ObjectCounter()
    counter.detected("ball")
    counter.detected("egg")
    counter.reset()
    assert counter.count("ball") == 0
    assert counter.count("egg") == 0


def test_counters_are_independent():
    first = ObjectCounter()
    second = ObjectCounter()
    first.detected("ball")
    assert second.count("ball") == 0
    assert first.count("ball") == 1