# lcekit

`lcekit` reads and writes the file formats of Minecraft: Legacy Console Edition. It is pure Python. Its one dependency is Pillow, which it uses to decode thumbnail images.

## Modules

- `lcekit.binaryio`: `BinaryIO` is a growable byte buffer with a cursor. It reads and writes 8-, 16-, 24-, 32- and 64-bit integers, UTF-8 strings and UTF-16/UTF-32 strings in either `ByteOrder` (`BIG` or `LITTLE`). A read past the end of the buffer raises `EOFError`.
- `lcekit.compression`: `decompress_zlib`, `decompress_zlib_with_length`, `decompress_chunk` (chunk RLE), `decompress_vita` (Vita RLE), `decompress` and `get_size_from_save`. Bad input raises `CompressionError`.
- `lcekit.filesystem`: a small in-memory tree. `Filesystem` holds a root `Directory` named `/`, and the tree is made of `File` and `Directory` objects. `Directory` provides `create_file`, `create_directory`, `get_child`, `add_child`, `remove_child`, `take_child`, `rename_child`, `move_child` and `print_listing`, plus the `size`, `file_count` and `directory_count` properties. `Filesystem` provides `get_by_path`, `get_or_create_dir_by_path` and `create_file_recursive`.
- `lcekit.save`: save containers. `SaveFile` is the current layout and `SaveFileOld` is the oldest one. Each has `from_bytes`, `to_bytes`, `size` and `calculate_index_offset`. `SaveFileOld.upgrade(version)` moves every file into a new `SaveFile`. `get_version_from_data` reads the version field, and `SaveFileVersion` lists the known versions.
- `lcekit.archive`: `.arc` archives, through `Archive.from_bytes`, `Archive.to_bytes` and `Archive.size`.
- `lcekit.color`: `.col` colour tables. `ColorFile` has named colours and world colours; `ColorFileOld` has named colours only. The entry types are `Color`, `WorldColor` and `ARGB`.
- `lcekit.localization`: `.loc` files, through `LocalizationFile` and `Language`. Version 2 files also carry a unique-id flag and a key list.
- `lcekit.thumb`: `Thumb.from_bytes` reads a `THUMB` file. It returns the world name, the image as RGBA bytes with its `width` and `height`, and the PNG text `properties`.
- `lcekit.soundbank`: `Soundbank.from_bytes` reads `.msscmp` sound banks. The byte order and the generation are detected from the data. Each entry becomes a `BinkaFile` named `<path>.binka` and carries a `sample_rate`.
- `lcekit.region`: `Region.from_bytes` reads the chunk table of a region and parses each chunk that is present. `Region.get_xz_from_filename` and `Region.get_dim_from_filename` read the coordinates and the dimension from a file name. `SplitSave` does the same for `GAMEDATA_…` names.
- `lcekit.chunk`: `Chunk.from_bytes` inflates a stored chunk (zlib, then chunk RLE). For a version 12 chunk it reads the header and the section table: `x`, `z`, `last_update`, `inhabited_time`, `section_jumps`, `section_sizes` and `section_offsets`.
- `lcekit.block`: `Block.from_packed` unpacks a 16-bit block value, and `Block.packed()` packs one.
- `lcekit.info`: `get_library_version`, `library_string` and `print_library_info`.

## Examples

Read a save and list the files in its root directory:

```python
from lcekit.binaryio import ByteOrder
from lcekit.save import SaveFile

with open("savegame.dat", "rb") as fh:
    save = SaveFile.from_bytes(fh.read(), ByteOrder.LITTLE)

for name, child in save.root.children.items():
    print(name, child.size)
```

Convert the save to big-endian and write it out:

```python
save.endian = ByteOrder.BIG
with open("savegame-be.dat", "wb") as fh:
    fh.write(save.to_bytes())
```

Decode a Vita save before reading it. The decompressed data starts at offset 8:

```python
from lcekit.compression import decompress_vita, get_size_from_save

raw = open("savegame-vita.dat", "rb").read()
data = decompress_vita(raw, get_size_from_save(raw, ByteOrder.LITTLE), 8)
save = SaveFile.from_bytes(data, ByteOrder.LITTLE)
```

Unpack an archive:

```python
from lcekit.archive import Archive

with open("media.arc", "rb") as fh:
    archive = Archive.from_bytes(fh.read())

print(archive.root.file_count, "files")
terrain = archive.get_by_path("/res/terrain.png")
```

Look up a colour:

```python
from lcekit.color import ColorFile

with open("colours.col", "rb") as fh:
    colours = ColorFile.from_bytes(fh.read())

print(colours.get_color_by_name("Sky"))
```

Read a region's coordinates from its file name:

```python
from lcekit.region import Region

print(Region.get_xz_from_filename("r.-1.2.mcr"))       # (-1, 2)
print(Region.get_dim_from_filename("DIM-1r.0.0.mcr"))  # -1
```

Print the library version:

```python
from lcekit.info import get_library_version, print_library_info

print(get_library_version())
print_library_info()
```

## What it does not do

- It has no command-line tool; it is a library only.
- Sound banks, thumbnails, regions and chunks can be read but not written.
- Chunk parsing stops at the header and the section table. Block data inside sections is not decoded.
- `SplitSave.from_bytes` uses only the file name; it does not parse the chunk data.
- Decompression is available for zlib, chunk RLE and Vita RLE only. LZX and raw deflate are listed in `CompressionType` but not implemented. `decompress` raises `ValueError` for either of them.

## Running the tests

```
pip install "lcekit[test]"
pytest
```