"""
Example: Building ImageMagick commands with thumbkit

This example demonstrates how to:
- Turn a set of options into a convert command for an image on disk
- Describe sources yourself when metadata is already known (PDF pages, GIF frames)
- Run the generated command
"""
from pathlib import Path
from thumbkit import (
    ConversionRequest,
    ImageDimensions,
    ImageFormat,
    ImageProcessor,
    OptionsBag,
    OutputExtension,
    OutputSpec,
    ProcessorConfig,
    SourceImageInfo,
)


def crop_thumbnail(source: Path, output: Path):
    """Fill-and-crop thumbnail of a file on disk."""
    processor = ImageProcessor()

    request = processor.create_request(
        source,
        {
            "width": 300,
            "height": 300,
            "crop": True,
            "gravity": "center",
            "preserve-natural-size": True,
            "quality": 85,
            "mozjpeg": 1,
        },
        output,
    )

    command = processor.generate_command(request)
    print(f"Command: {command}")

    result = processor.process_new_image(request)
    print(f"Written: {result.output_path}")
    return result


def show_known_sources():
    """Generate commands for sources described by the caller."""
    processor = ImageProcessor(ProcessorConfig(convert_command="convert"))

    pdf = SourceImageInfo("invoice.pdf", ImageDimensions(612, 792), ImageFormat.PDF)
    pdf_request = ConversionRequest(
        source=pdf,
        options=OptionsBag({"page_number": 2, "density": 150, "width": 800}),
        output=OutputSpec.for_extension("page-2.png", OutputExtension.PNG),
    )
    print(processor.generate_command(pdf_request))

    gif = SourceImageInfo("animation.gif", ImageDimensions(480, 270), ImageFormat.GIF)
    gif_request = ConversionRequest(
        source=gif,
        options=OptionsBag({"gif-frame": 3, "height": 120, "quality": 80}),
        output=OutputSpec.for_extension("frame.webp", OutputExtension.WEBP),
    )
    print(processor.generate_command(gif_request))


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 3:
        show_known_sources()
        print("Usage: python image_processing.py <source> <output>")
        sys.exit(1)

    source = Path(sys.argv[1])
    if not source.exists():
        print(f"File not found: {source}")
        sys.exit(1)

    crop_thumbnail(source, Path(sys.argv[2]))
