from tries.byte_trie import Bookmark, ByteTrie, ByteTrieNode, CursorError

__all__ = ["Bookmark", "ByteTrie", "ByteTrieNode", "CursorError"]
