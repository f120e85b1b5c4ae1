"""Tests for CLI interface."""

import json
import os
import tempfile

from click.testing import CliRunner

from esmodels.cli import cli

FILE_DIR = os.path.dirname(os.path.realpath(__file__))
WIDE = {"COLUMNS": "200"}


def describe_list_command():
    def lists_models(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["list"], env=WIDE)

        expect(result.exit_code) == 0
        expect("SearchRequest" in result.output) == True
        expect("IndicesResponse" in result.output) == True


def describe_info_command():
    def shows_fields(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "SearchRequest"], env=WIDE)

        expect(result.exit_code) == 0
        expect("SearchRequest" in result.output) == True
        expect("stored_fields" in result.output) == True

    def outputs_json(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "DateRangeAggregate", "--json"])

        expect(result.exit_code) == 0
        data = json.loads(result.output)
        expect(data["name"]) == "DateRangeAggregate"
        expect(data["kind"]) == "object"
        expect(data["ancestors"]) == ["RangeAggregate", "MultiBucketAggregateBase", "AggregateBase"]
        expect([f["name"] for f in data["fields"]]) == ["meta", "buckets"]
        expect(data["fields"][1]["required"]) == True

    def json_lists_aliases(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "SearchRequest", "--json"])

        fields = {f["name"]: f for f in json.loads(result.output)["fields"]}
        expect(fields["aggregations"]["aliases"]) == ["aggs"]
        expect(fields["from_"]["wire_key"]) == "from"
        expect(fields["index"]["location"]) == "path"

    def unknown_model(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "NoSuchModel"])

        expect(result.exit_code) == 1
        expect("Unknown model: NoSuchModel" in result.output) == True


def describe_convert_command():
    def normalizes_payload(expect):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["convert", "SearchRequest", "-i", f"{FILE_DIR}/search_request.json"]
        )

        expect(result.exit_code) == 0
        expect(result.output.strip()) == (
            '{"aggregations":{"count":{"value_count":{"field":"id"}}},'
            '"query":{"term":{"user":{"value":"kimchy"}}},"size":5}'
        )

    def writes_output_file(expect):
        runner = CliRunner()
        with tempfile.NamedTemporaryFile(suffix=".json", delete=False) as f:
            output_file = f.name

        try:
            result = runner.invoke(
                cli,
                [
                    "convert",
                    "SearchRequest",
                    "-i",
                    f"{FILE_DIR}/search_request.json",
                    "-o",
                    output_file,
                    "--indent",
                    "2",
                ],
            )
            expect(result.exit_code) == 0
            with open(output_file) as f:
                content = json.load(f)
            expect(content["size"]) == 5
            expect("aggs" in content) == False
        finally:
            os.unlink(output_file)

    def reports_missing_required(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["convert", "TotalHits", "-i", f"{FILE_DIR}/total_hits.json"])

        expect(result.exit_code) == 1
        expect("Missing required property 'TotalHits.relation'" in result.output) == True

    def lenient_skips_required_checks(expect):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["convert", "TotalHits", "-i", f"{FILE_DIR}/total_hits.json", "--lenient"]
        )

        expect(result.exit_code) == 0
        expect(result.output.strip()) == '{"value":1}'

    def reports_invalid_json(expect):
        runner = CliRunner()
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as f:
            f.write("{not json")
            input_file = f.name

        try:
            result = runner.invoke(cli, ["convert", "SearchRequest", "-i", input_file])
            expect(result.exit_code) == 1
            expect("Invalid JSON" in result.output) == True
        finally:
            os.unlink(input_file)

    def reports_unrecognized_values(expect):
        runner = CliRunner()
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as f:
            f.write('{"size": "many"}')
            input_file = f.name

        try:
            result = runner.invoke(cli, ["convert", "SearchRequest", "-i", input_file])
            expect(result.exit_code) == 1
            expect("size" in result.output) == True
        finally:
            os.unlink(input_file)
