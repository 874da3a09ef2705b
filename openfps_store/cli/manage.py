import argparse
import sys
from pathlib import Path

from ..config import load_config
from ..errors import StoreError
from ..logging_config import configure_logging
from ..models.project import ProjectMetadata
from ..repositories.filesystem_repository import FilesystemRepository
from ..services import pixel_codec
from ..services.document_service import DocumentService
from ..services.image_service import ImageService
from ..services.recent_projects_service import RecentProjectsService
from ..services.texture_service import TextureService, splat_map_filename


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="openfps-store",
                                     description="Inspect and maintain Open FPS project storage.")
    parser.add_argument("--env-file", help="Extra .env file to load before reading settings")
    sub = parser.add_subparsers(dest="group", required=True)

    recent = sub.add_parser("recent", help="Recent projects list")
    recent_sub = recent.add_subparsers(dest="action", required=True)
    recent_sub.add_parser("list")
    recent_sub.add_parser("add").add_argument("path")
    recent_sub.add_parser("remove").add_argument("path")

    project = sub.add_parser("project", help="Project folders")
    project_sub = project.add_subparsers(dest="action", required=True)
    create = project_sub.add_parser("create")
    create.add_argument("path")
    create.add_argument("--name", help="Project name (defaults to the folder name)")
    rename = project_sub.add_parser("rename")
    rename.add_argument("path")
    rename.add_argument("new_name")
    splatmap = project_sub.add_parser("splatmap", help="Write a default splat map unless a readable one exists")
    splatmap.add_argument("path")
    splatmap.add_argument("--index", type=int, default=0)
    splatmap.add_argument("--resolution", type=int, help="Side length (defaults to OPENFPS_SPLATMAP_RESOLUTION)")

    png = sub.add_parser("png", help="RGBA image files")
    png_sub = png.add_subparsers(dest="action", required=True)
    png_sub.add_parser("info").add_argument("file")
    normalize = png_sub.add_parser("normalize", help="Rewrite any L/LA/RGB/RGBA image as RGBA PNG")
    normalize.add_argument("src")
    normalize.add_argument("dst")

    return parser


def run(args: argparse.Namespace) -> int:
    config = load_config(args.env_file)
    configure_logging(config.log_level)

    filesystem = FilesystemRepository()
    documents = DocumentService(filesystem)

    if args.group == "recent":
        recent = RecentProjectsService(config.app_data_dir, filesystem, documents)
        if args.action == "list":
            for path in recent.list():
                print(path)
        elif args.action == "add":
            recent.touch(str(Path(args.path).resolve()))
        else:
            recent.remove(str(Path(args.path).resolve()))

    elif args.group == "project":
        if args.action == "create":
            root = Path(args.path)
            metadata = ProjectMetadata.create(args.name or root.resolve().name)
            documents.create_project(root, metadata)
            print(f"Created project '{metadata.name}' at {root}")
        elif args.action == "rename":
            print(documents.rename_project(args.path, args.new_name))
        else:
            textures = TextureService(filesystem, config.splatmap_resolution)
            written = textures.ensure_splat_map(args.path, args.index, args.resolution)
            state = "Wrote default" if written else "Kept existing"
            print(f"{state} {splat_map_filename(args.index)} in {args.path}")

    else:
        if args.action == "info":
            raster = pixel_codec.read_raster(filesystem.read_bytes(args.file))
            print(f"{args.file}: {raster.width}x{raster.height} {raster.encoding.value}")
        else:
            images = ImageService(filesystem)
            buffer = images.load(args.src)
            images.save(args.dst, buffer)
            print(f"Wrote {buffer.width}x{buffer.height} RGBA to {args.dst}")

    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except StoreError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
