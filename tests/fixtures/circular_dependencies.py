"""Fixture classes for testing circular dependencies."""


class Class1CircularDependencies:
    """Injects Class2CircularDependencies, which injects this class back."""

    class2: "Class2CircularDependencies"


class Class2CircularDependencies:
    """Injects Class1CircularDependencies, which injects this class back."""

    class1: Class1CircularDependencies
