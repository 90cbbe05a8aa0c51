from adminkit.captcha_store import CacheStore

EXPIRATION = 6000


class MemoryCache:
    def __init__(self):
        self.items = {}
        self.expires = {}

    def get(self, key):
        if key not in self.items:
            raise KeyError(key)
        return self.items[key]

    def set(self, key, value, expire):
        self.items[key] = value
        self.expires[key] = expire

    def delete(self, key):
        del self.items[key]


def test_set_get():
    store = CacheStore(MemoryCache(), EXPIRATION)
    store.set("captcha id", "random-string")
    assert store.get("captcha id", False) == "random-string"


def test_get_clear():
    store = CacheStore(MemoryCache(), EXPIRATION)
    store.set("captcha id", "932839jfffjkdss")
    assert store.get("captcha id", True) == "932839jfffjkdss"
    assert store.get("captcha id", False) == ""


def test_set_many_without_expiry():
    store = CacheStore(MemoryCache(), -1)
    for i in range(101):
        store.set(str(i), str(i))
    assert store.get("100", False) == "100"
    assert store.get("0", False) == "0"


def test_collect_not_expire():
    store = CacheStore(MemoryCache(), 36000)
    for i in range(50):
        store.set(str(i), str(i))
    assert store.get("0", False) == "0"


def test_new_cache_store_passes_expiration():
    for expiration in (36000, 180000):
        cache = MemoryCache()
        store = CacheStore(cache, expiration)
        store.set("id", "answer")
        assert cache.expires["id"] == expiration


def test_missing_id_gives_empty_string():
    store = CacheStore(MemoryCache(), EXPIRATION)
    assert store.get("nothing", True) == ""


def test_verify():
    store = CacheStore(MemoryCache(), EXPIRATION)
    store.set("id", "abcd")
    assert store.verify("id", "wrong", False) is False
    assert store.verify("id", "abcd", True) is True
    assert store.verify("id", "abcd", False) is False