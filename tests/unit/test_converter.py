from __future__ import annotations

import pytest

from casing.converter import split_extension, to_kebab, to_kebab_name


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("HTTPServer", "http-server"),
        ("ButtonComponent", "button-component"),
        ("XMLHttpRequest", "xml-http-request"),
        ("getHTTP2Response", "get-http2-response"),
        ("V2Api", "v2-api"),
        ("3DModel", "3d-model"),
        ("_3DModel", "3d-model"),
        ("2024-Q1Report", "2024-q1-report"),
        ("foo_bar baz", "foo-bar-baz"),
        ("Foo__Bar--Baz", "foo-bar-baz"),
        ("already-kebab", "already-kebab"),
        ("lowercase", "lowercase"),
        ("12345", "12345"),
        ("__tests__", "tests"),
        ("_Layout", "layout"),
        ("-Leading-And-Trailing-", "leading-and-trailing"),
        ("-LeadingAndTrailing-", "leading-and-trailing"),
        ("--", "--"),
        ("", ""),
    ],
)
def test_to_kebab(identifier: str, expected: str) -> None:
    assert to_kebab(identifier) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("UtilityFunctions.ts", "utility-functions.ts"),
        ("ButtonComponent.svelte", "button-component.svelte"),
        ("MyComponent.Stories.tsx", "my-component.stories.tsx"),
        ("Styles.module.css", "styles.module.css"),
        (".eslintrc", ".eslintrc"),
        (".EnvLocal", ".env-local"),
        ("__tests__", "tests"),
        ("_Layout.svelte", "layout.svelte"),
        ("README", "readme"),
        ("Makefile.", "makefile."),
        ("ComponentLibrary", "component-library"),
    ],
)
def test_to_kebab_name(name: str, expected: str) -> None:
    assert to_kebab_name(name) == expected


def test_extension_is_converted_like_the_base() -> None:
    assert to_kebab_name("MainModule.TS") == "main-module.ts"
    assert to_kebab_name("DataSet.Json") == "data-set.json"
    assert to_kebab_name("DataSet.Json").count(".") == 1


@pytest.mark.parametrize(
    "name",
    ["UserCard.Stories.tsx", "Foo.BarBaz.ts", "_App.Layout.svelte", ".EnvLocal.Backup"],
)
def test_name_conversion_ignores_where_the_extension_is_split(name: str) -> None:
    # Import paths often omit the extension that the file on disk carries.
    stem = name.rsplit(".", 1)[0]
    assert to_kebab_name(name).startswith(to_kebab_name(stem) + ".")


def test_split_extension_ignores_leading_dot() -> None:
    assert split_extension(".gitignore") == (".gitignore", "")
    assert split_extension("archive.tar.gz") == ("archive.tar", "gz")
    assert split_extension("NoExtension") == ("NoExtension", "")


@pytest.mark.parametrize(
    "value",
    [
        "HTTPServer",
        "ButtonComponent.svelte",
        "__MyTests__",
        "Foo Bar_Baz-Qux.TS",
        "ÉcoleNormale",
        "a1B2c3D4",
        "-Leading-And-Trailing-",
        "  ",
        ".Hidden.File",
    ],
)
def test_conversion_is_a_fixed_point(value: str) -> None:
    once = to_kebab_name(value)
    assert to_kebab_name(once) == once
    assert to_kebab(to_kebab(value)) == to_kebab(value)
