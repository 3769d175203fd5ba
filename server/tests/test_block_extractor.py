from sitegen.core.block_extractor import classify, extract_blocks, parse_code_blocks
from sitegen.models import GenerationStatus


def test_extracts_all_three_bodies_verbatim():
    raw = "```html\n<p>hi</p>\n```\n```css\np { color: red; }\n```\n```js\nconsole.log(1);\n```\n"
    bundle = parse_code_blocks(raw)
    assert bundle.html == "<p>hi</p>\n"
    assert bundle.css == "p { color: red; }\n"
    assert bundle.js == "console.log(1);\n"


def test_missing_labels_become_empty_strings():
    result = extract_blocks("```html\n<html></html>\n```")
    assert result.bundle.html == "<html></html>\n"
    assert result.bundle.css == ""
    assert result.bundle.js == ""
    assert result.missing == ["css", "js"]


def test_javascript_alias_fills_script_field():
    bundle = parse_code_blocks("```javascript\nlet a = 1;\n```")
    assert bundle.js == "let a = 1;\n"


def test_labels_are_case_insensitive():
    bundle = parse_code_blocks("```HTML\n<b>x</b>\n```\n```CSS\nb{}\n```")
    assert bundle.html == "<b>x</b>\n"
    assert bundle.css == "b{}\n"


def test_last_block_wins_for_repeated_label():
    raw = "```css\na{}\n```\ntext\n```css\nb{}\n```"
    assert parse_code_blocks(raw).css == "b{}\n"


def test_last_block_wins_across_script_aliases():
    raw = "```javascript\nfirst();\n```\n```js\nsecond();\n```"
    assert parse_code_blocks(raw).js == "second();\n"


def test_fence_must_open_a_line():
    raw = "see ```css\na{}\n``` inline"
    assert parse_code_blocks(raw).css == ""


def test_unterminated_fence_does_not_match():
    result = extract_blocks("```css\nbody { margin: 0; }\n")
    assert result.bundle.css == ""
    assert "css" in result.missing


def test_json_label_is_not_mistaken_for_js():
    assert parse_code_blocks('```json\n{"a": 1}\n```').js == ""


def test_extraction_is_idempotent(bakery_response):
    first = extract_blocks(bakery_response)
    second = extract_blocks(bakery_response)
    assert first == second
    assert first.missing == []


def test_empty_input():
    result = extract_blocks("")
    assert result.bundle.html == result.bundle.css == result.bundle.js == ""


def test_classify_success(bakery_response):
    result = extract_blocks(bakery_response)
    assert classify(bakery_response, result) == (GenerationStatus.SUCCESS, [])


def test_classify_partial_parse():
    raw = "```html\n<html></html>\n```"
    status, warnings = classify(raw, extract_blocks(raw))
    assert status == GenerationStatus.PARTIAL_PARSE
    assert warnings == ["no css block found in model output", "no js block found in model output"]


def test_classify_upstream_empty():
    status, warnings = classify("   ", extract_blocks("   "))
    assert status == GenerationStatus.UPSTREAM_EMPTY
    assert warnings
