"""
Byte Trie (one level per key byte, 256-way fanout) with a resumable scan cursor.

This module provides an associative container keyed by byte strings. Every
node owns up to 256 children, one per possible next byte, so walking the
children of a node in slot order enumerates keys in byte-lexicographic order
without any sorting.

Key design choices:
- **Lazy slot arrays:** `ByteTrieNode.children` stays `None` until the first
  child is linked, then becomes a 256-entry list. A `degree` counter tracks
  occupied slots so "has children" is O(1) and the list can be dropped again
  when its last child is unlinked.
- **Path nodes:** a node may exist without holding a value. `is_terminal`
  marks nodes whose root-to-node path is a stored key; every other node is
  kept alive only because some longer key runs through it.
- **Bookmarks:** deletion and enumeration both work off an explicit stack of
  `Bookmark` frames (node, selecting byte, next slot to examine). Nothing
  recurses, so key length is bounded by memory, not the interpreter stack.
- **Resumable scan:** `scan()` keeps its bookmark stack on the trie between
  calls and advances only as far as the next stored key.


Classes
-------
ByteTrieNode
    Node holding `children` (None or list of 256 slots), `degree`,
    `payload` and `is_terminal`.
Bookmark
    One frame of traversal state shared by `delete` and `scan`.
ByteTrie
    Public API: insert, find, delete, scan, current_key, current_pair, plus
    batch helpers, ordered iteration and structural stats.
CursorError
    Raised when the scan cursor is read while not positioned on a key.


Complexity (typical)
--------------------
- insert / find / delete: O(L) where L = len(key); pruning adds O(L) at most
- scan: amortized O(1) slots per node visited; a single call costs the
  distance to the next stored key (at most 256 slot probes per level)
- count_nodes: O(#nodes)


Conventions & Notes
-------------------
- **Keys:** `bytes`, `bytearray` and `memoryview` are used as-is; `str` keys
  are encoded with the trie's `encoding`. Keys are always reported as `bytes`.
- **Empty key:** the root represents `b""`; inserting it marks the root
  terminal and `scan()` yields it first.
- **Deleted payloads:** when a key is deleted its node's payload is reset to
  `None`, so the trie never keeps a removed value alive.
- **Threads:** no internal locking. Callers must synchronize concurrent
  access themselves, and must not insert or delete while a scan is in
  progress; the remainder of that enumeration is undefined.
    """

import logging
from typing import Generic, Iterable, Iterator, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

FANOUT = 256


class CursorError(RuntimeError):
  """The scan cursor is not positioned on a key."""


class ByteTrieNode:
  __slots__ = ("children", "degree", "payload", "is_terminal")

  def __init__(self):
    self.children = None
    self.degree = 0
    self.payload = None
    self.is_terminal = False

  def child(self, b):
    children = self.children
    return None if children is None else children[b]

  def link(self, b, node):
    """Attach `node` under byte `b`; the slot must be empty."""
    if self.children is None:
      self.children = [None] * FANOUT
    self.children[b] = node
    self.degree += 1

  def unlink(self, b):
    """Release the child under byte `b`, dropping the slot array when empty."""
    self.children[b] = None
    self.degree -= 1
    if self.degree == 0:
      self.children = None


class Bookmark:
  """One level of traversal state.

  `edge` is the byte followed from the parent to reach `node` (None for the
  root). `next_index` is the next child slot to examine, used while scanning.
  """
  __slots__ = ("node", "edge", "next_index")

  def __init__(self, node, edge=None, next_index=0):
    self.node = node
    self.edge = edge
    self.next_index = next_index


def _advance(stack):
  """Move a bookmark stack to the next terminal node in byte order.

  Returns True with the terminal node's frame on top of `stack`, or False
  once every frame has been popped.
  """
  while stack:
    top = stack[-1]
    children = top.node.children
    if children is not None:
      for b in range(top.next_index, FANOUT):
        child = children[b]
        if child is not None:
          top.next_index = b + 1
          stack.append(Bookmark(child, b))
          break
      else:
        top.next_index = FANOUT
        child = None
      if child is not None:
        if child.is_terminal:
          return True
        continue
    stack.pop()
  return False


def _stack_key(stack):
  return bytes(bm.edge for bm in stack[1:])


class ByteTrie(Generic[T]):
  """Byte-keyed trie mapping keys to opaque values of type T.

  Not thread-safe: guard every operation with an external lock when sharing
  an instance, and never mutate it while a `scan()` is in progress.
  """
  __slots__ = ("root", "encoding", "_bookmarks", "_size")

  def __init__(self, encoding="utf-8"):
    self.root = ByteTrieNode()
    self.encoding = encoding
    self._bookmarks = []
    self._size = 0

  def _key_bytes(self, key):
    if isinstance(key, bytes):
      return key
    if isinstance(key, str):
      return key.encode(self.encoding)
    if isinstance(key, (bytearray, memoryview)):
      return bytes(key)
    raise TypeError(f"trie keys must be bytes-like or str, not {type(key).__name__}")

  def __len__(self):
    return self._size

  def __contains__(self, key):
    return self.find(key)[1]


  def insert(self, key, value: Optional[T] = None) -> None:
    """Store `value` under `key`, overwriting any previous value.

    Parameters
    ----------
    key : bytes | bytearray | memoryview | str
        Key to store. The empty key is valid and lives on the root.
    value : T, default=None
        Opaque payload; the trie never inspects it.

    Notes
    -----
    - Follows existing children as far as they go, then creates one new
      node per remaining byte.
    - Never removes structure.

    Complexity
    ----------
    O(L) time, O(new_nodes) space where L = len(key).
    """
    key = self._key_bytes(key)
    node = self.root
    i = 0
    lk = len(key)

    while i < lk:
      nxt = node.child(key[i])
      if nxt is None:
        break
      node = nxt
      i += 1

    for b in key[i:]:
      nxt = ByteTrieNode()
      node.link(b, nxt)
      node = nxt

    if not node.is_terminal:
      node.is_terminal = True
      self._size += 1
    node.payload = value


  def find(self, key) -> Tuple[Optional[T], bool]:
    """Return `(value, found)` for `key`.

    `found` is False when the path is missing or ends on a path node; the
    value is None in both cases.
    """
    node = self.root
    for b in self._key_bytes(key):
      node = node.child(b)
      if node is None:
        return None, False
    if not node.is_terminal:
      return None, False
    return node.payload, True


  def delete(self, key) -> bool:
    """Remove `key` and prune nodes that no longer serve any stored key.

    Returns
    -------
    bool
        True if `key` was stored before the call, False otherwise. A False
        result leaves the trie unchanged.

    Implementation detail
    ---------------------
    The walk down records one `Bookmark` per depth. After unmarking the
    target node the stack is popped from the deepest frame: each frame that
    is neither terminal nor has children is unlinked from the frame below it
    on the stack, and the walk stops at the first node still in use. The
    root frame is never unlinked.
    """
    node = self.root
    bookmarks = [Bookmark(node)]

    for b in self._key_bytes(key):
      node = node.child(b)
      if node is None:
        return False
      bookmarks.append(Bookmark(node, b))

    was_present = node.is_terminal
    node.is_terminal = False
    if not was_present:
      return False

    node.payload = None
    self._size -= 1

    while len(bookmarks) > 1:
      bm = bookmarks.pop()
      cur = bm.node
      if cur.is_terminal or cur.degree:
        break
      bookmarks[-1].node.unlink(bm.edge)
    return True


  def scan(self) -> bool:
    """Advance the cursor to the next stored key in byte order.

    Returns True when the cursor is positioned on a key (read it with
    `current_key` / `current_pair`), False when enumeration is complete.
    Calling again after False starts a fresh enumeration.

    Each call only does the work needed to reach the next terminal node.
    """
    stack = self._bookmarks
    if not stack:
      logger.debug("scan: starting enumeration of %d keys", self._size)
      stack.append(Bookmark(self.root))
      if self.root.is_terminal:
        return True

    if _advance(stack):
      return True
    logger.debug("scan: enumeration exhausted")
    return False


  def reset_scan(self) -> None:
    """Abandon any in-progress enumeration; the next `scan()` starts over."""
    self._bookmarks = []


  def _cursor_top(self):
    stack = self._bookmarks
    if not stack or not stack[-1].node.is_terminal:
      raise CursorError("scan cursor is not positioned on a key; call scan() first")
    return stack


  def current_key(self) -> bytes:
    """Key under the scan cursor, rebuilt from the bookmarked edge bytes."""
    return _stack_key(self._cursor_top())


  def current_pair(self) -> Tuple[bytes, Optional[T]]:
    """`(key, value)` under the scan cursor."""
    stack = self._cursor_top()
    return _stack_key(stack), stack[-1].node.payload


  def items(self) -> Iterator[Tuple[bytes, Optional[T]]]:
    """Yield `(key, value)` pairs in byte order.

    Uses a private bookmark stack, so it neither reads nor disturbs the
    `scan()` cursor. The same mutation caveat applies while iterating.
    """
    stack = [Bookmark(self.root)]
    if self.root.is_terminal:
      yield b"", self.root.payload
    while _advance(stack):
      yield _stack_key(stack), stack[-1].node.payload


  def keys(self) -> Iterator[bytes]:
    for key, _ in self.items():
      yield key

  __iter__ = keys


  def batch_insert(self, pairs: Iterable) -> int:
    """Insert many entries.

    Parameters
    ----------
    pairs : Iterable[tuple[key, T] | key]
        `(key, value)` tuples, or bare keys stored with value None.

    Returns
    -------
    int
        Number of entries processed (re-inserted keys count again).
    """
    n = 0
    for item in pairs:
      if isinstance(item, tuple):
        key, value = item
      else:
        key, value = item, None
      self.insert(key, value)
      n += 1
    logger.debug("batch_insert: %d entries, %d keys stored", n, self._size)
    return n


  def batch_delete(self, keys: Iterable) -> Tuple[int, int]:
    """Delete many keys.

    Returns
    -------
    tuple[int, int]
        (deleted_count, missing_count)
    """
    deleted = 0
    missing = 0
    for key in keys:
      if self.delete(key):
        deleted += 1
      else:
        missing += 1
    logger.debug("batch_delete: deleted=%d missing=%d", deleted, missing)
    return deleted, missing


  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If False, return the total node count (the root included, so an
        empty trie reports 1).
        If True, return average out-degree over internal nodes only.

    Complexity
    ----------
    O(#nodes) time, O(depth * 256) extra space.
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1
      if node.degree:
        total_deg += node.degree
        internal += 1
        stack.extend(c for c in node.children if c is not None)
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes
