from typing import TypeAlias

from shellexec.domain.streams import ByteStream, VirtualFileStream

ProducedValue: TypeAlias = str | bytes | ByteStream | VirtualFileStream
