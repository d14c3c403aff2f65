def test_import_and_logging():
    import cargo_next
    from cargo_next.logging import get_logger, init_logging

    init_logging("DEBUG")
    log = get_logger("test")
    log.debug("smoke test debug message")

    assert cargo_next.__version__
    assert hasattr(log, "debug")


def test_core_modules_do_not_import_each_other():
    import cargo_next.manifest as manifest
    import cargo_next.version as version

    assert not hasattr(manifest, "parse_version")
    assert not hasattr(version, "read_version_string")
