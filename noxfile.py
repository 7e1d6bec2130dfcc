import nox


@nox.session(python=["3.9", "3.10", "3.11", "3.12"])
def property_tests(session):
    session.install("-e", ".[dev]")
    flags = session.posargs if session.posargs else ["-n", "auto"]
    session.run(
        "pytest",
        "--cov=jointable",
        "--cov-report=term-missing",
        *flags,
    )
