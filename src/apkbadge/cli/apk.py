"""CLI commands for inspecting APK files."""

import json
from pathlib import Path
from typing import Any

import typer

from apkbadge.core.analyzer import analyze
from apkbadge.exceptions import ApkBadgeError
from apkbadge.models.package import PackageMetadata
from apkbadge.utils.output import console

app = typer.Typer(no_args_is_help=True)

APK_ARGUMENT = typer.Argument(
    ...,
    help="Path to the APK file to inspect.",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)


def _load(apk_path: Path) -> PackageMetadata:
    """Analyze an APK or exit with an error message."""
    metadata = analyze(apk_path)
    if metadata is None:
        console.print_error(f"Could not analyze {apk_path}")
        raise typer.Exit(1)
    return metadata


def _summary(metadata: PackageMetadata, with_signature: bool) -> dict[str, Any]:
    data = metadata.model_dump(mode="json", exclude={"results"})
    data["adaptive_icon"] = metadata.adaptive_icon
    data["backward_compatible_adaptive_icon"] = metadata.backward_compatible_adaptive_icon
    if with_signature:
        data["signature"] = metadata.signature
        data["verified"] = metadata.verified
        data["installable"] = metadata.installable
        data["uninstallable_reasons"] = [r.value for r in metadata.uninstallable_reasons]
    return data


@app.command("info")
def info(
    apk_path: Path = APK_ARGUMENT,
    no_signature: bool = typer.Option(
        False,
        "--no-signature",
        help="Skip signature extraction (no apksigner/keytool calls).",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON.",
    ),
) -> None:
    """Show package name, version, sdk range, labels and icons of an APK."""
    console.set_json_mode(json_output)

    try:
        metadata = _load(apk_path)
        data = _summary(metadata, with_signature=not no_signature)

        if json_output:
            typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
            return

        rows = [
            ("Package", data["package_name"]),
            ("Version", f"{data['version_name']} ({data['version_code']})"),
            ("Min SDK", data["sdk_version"]),
            ("Target SDK", data["target_sdk_version"]),
            ("Label", data["label"]),
            ("Icon", data["icon"]),
            ("Test only", data["test_only"]),
            ("Adaptive icon", data["adaptive_icon"]),
        ]
        if not no_signature:
            rows += [
                ("Signature", data["signature"]),
                ("Verified", data["verified"]),
                ("Installable", data["installable"]),
            ]
        console.print_fields(apk_path.name, rows)

        if metadata.labels:
            console.print("\n[bold]Labels:[/bold]")
            for locale, label in sorted(metadata.labels.items()):
                console.print(f"  [cyan]{locale}[/cyan] {label}")

        if metadata.icons:
            console.print("\n[bold]Icons:[/bold]")
            for density, path in sorted(metadata.icons.items()):
                console.print(f"  [cyan]{density}[/cyan] {path}")

        if not no_signature and metadata.uninstallable_reasons:
            reasons = ", ".join(r.value for r in metadata.uninstallable_reasons)
            console.print_warning(f"Not installable: {reasons}")

        console.print()

    except ApkBadgeError as e:
        console.print_error(str(e))
        raise typer.Exit(1) from None


@app.command("icon")
def icon(
    apk_path: Path = APK_ARGUMENT,
    density: int | None = typer.Option(
        None,
        "--density",
        "-d",
        help="Icon density in dpi (e.g. 160). Defaults to the default icon.",
    ),
    png: bool = typer.Option(
        False,
        "--png",
        help="Prefer a PNG rendition over a vector/adaptive XML icon.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file. Defaults to the icon's file name in the current directory.",
    ),
) -> None:
    """Extract the application icon of an APK."""
    try:
        metadata = _load(apk_path)
        resolver = metadata.icon_resolver()
        path = resolver.candidate_path(density, png)
        content = resolver.resolve(density, png)
        if path is None or content is None:
            console.print_error("Icon not found")
            raise typer.Exit(1)

        target = output or Path(Path(path).name)
        target.write_bytes(content)
        console.print_success(f"Icon saved to {target}")

    except ApkBadgeError as e:
        console.print_error(str(e))
        raise typer.Exit(1) from None


@app.command("signature")
def signature(apk_path: Path = APK_ARGUMENT) -> None:
    """Print the SHA-1 fingerprint of the APK's first signer."""
    try:
        metadata = _load(apk_path)
        if metadata.signature is None:
            console.print_error("No signature found")
            raise typer.Exit(1)
        typer.echo(metadata.signature)

    except ApkBadgeError as e:
        console.print_error(str(e))
        raise typer.Exit(1) from None
