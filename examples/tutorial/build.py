"""Build script: regenerate the Monster bindings before packaging."""

from pathlib import Path

from flatcgen import GenerationRequest, Language, generate

HERE = Path(__file__).parent


def main() -> None:
    generate(GenerationRequest(
        output_language=Language.RUST,
        output_directory=HERE / "target" / "flatbuffers",
        input_schema_paths=[HERE / "schemas" / "monster.fbs"],
    ))


if __name__ == "__main__":
    main()
