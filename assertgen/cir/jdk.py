"""
Minimal JDK declarations every catalog starts from.

They are written as Java source and parsed by the same adapter as user code,
so supertypes, generic parameters and inherited accessors of the usual JDK
types are known without a JDK on the machine.
"""
from functools import lru_cache

from assertgen.cir.graph import TypeCatalog

JAVA_LANG = """
package java.lang;

public class Object {
    public final native Class<?> getClass();
    public native int hashCode();
    public boolean equals(Object obj) { return false; }
    public String toString() { return null; }
}

public final class Class<T> {
    public String getName() { return null; }
    public String getSimpleName() { return null; }
}

public interface Iterable<T> {
    java.util.Iterator<T> iterator();
}

public interface Comparable<T> {
    int compareTo(T o);
}

public interface AutoCloseable {
    void close() throws Exception;
}

public interface CharSequence {
    int length();
    char charAt(int index);
}

public interface Runnable {
    void run();
}

public final class String implements java.io.Serializable, Comparable<String>, CharSequence {
    public int length() { return 0; }
    public char charAt(int index) { return 0; }
    public boolean isEmpty() { return false; }
    public int compareTo(String o) { return 0; }
}

public abstract class Number implements java.io.Serializable {
    public abstract int intValue();
    public abstract long longValue();
    public abstract float floatValue();
    public abstract double doubleValue();
}

public final class Integer extends Number implements Comparable<Integer> {}
public final class Long extends Number implements Comparable<Long> {}
public final class Short extends Number implements Comparable<Short> {}
public final class Byte extends Number implements Comparable<Byte> {}
public final class Float extends Number implements Comparable<Float> {}
public final class Double extends Number implements Comparable<Double> {}
public final class Boolean implements java.io.Serializable, Comparable<Boolean> {}
public final class Character implements java.io.Serializable, Comparable<Character> {}
public final class Void {}

public abstract class Enum<E extends Enum<E>> implements Comparable<E>, java.io.Serializable {
    public final String name() { return null; }
    public final int ordinal() { return 0; }
    public final int compareTo(E o) { return 0; }
    public final Class<E> getDeclaringClass() { return null; }
}

public class Throwable implements java.io.Serializable {
    public String getMessage() { return null; }
    public String getLocalizedMessage() { return null; }
    public Throwable getCause() { return null; }
    public StackTraceElement[] getStackTrace() { return null; }
    public final Throwable[] getSuppressed() { return null; }
}

public final class StackTraceElement implements java.io.Serializable {
    public String getClassName() { return null; }
    public String getMethodName() { return null; }
    public String getFileName() { return null; }
    public int getLineNumber() { return 0; }
}

public class Exception extends Throwable {}
public class RuntimeException extends Exception {}
public class Error extends Throwable {}
public class IllegalArgumentException extends RuntimeException {}
public class IllegalStateException extends RuntimeException {}
public class NullPointerException extends RuntimeException {}
public class UnsupportedOperationException extends RuntimeException {}
public class IndexOutOfBoundsException extends RuntimeException {}
public class ClassNotFoundException extends Exception {}
public class InterruptedException extends Exception {}
public class CloneNotSupportedException extends Exception {}
"""

JAVA_UTIL = """
package java.util;

public interface Iterator<E> {
    boolean hasNext();
    E next();
}

public interface Collection<E> extends Iterable<E> {
    int size();
    boolean isEmpty();
}

public interface List<E> extends Collection<E> {}
public interface Set<E> extends Collection<E> {}
public interface SortedSet<E> extends Set<E> {}
public interface NavigableSet<E> extends SortedSet<E> {}
public interface Queue<E> extends Collection<E> {}
public interface Deque<E> extends Queue<E> {}

public abstract class AbstractCollection<E> implements Collection<E> {}
public abstract class AbstractList<E> extends AbstractCollection<E> implements List<E> {}
public abstract class AbstractSet<E> extends AbstractCollection<E> implements Set<E> {}
public abstract class AbstractQueue<E> extends AbstractCollection<E> implements Queue<E> {}

public class ArrayList<E> extends AbstractList<E> implements List<E> {}
public class LinkedList<E> extends AbstractList<E> implements List<E>, Deque<E> {}
public class HashSet<E> extends AbstractSet<E> implements Set<E> {}
public class LinkedHashSet<E> extends HashSet<E> implements Set<E> {}
public class TreeSet<E> extends AbstractSet<E> implements NavigableSet<E> {}
public class ArrayDeque<E> extends AbstractCollection<E> implements Deque<E> {}
public class PriorityQueue<E> extends AbstractQueue<E> {}

public interface Map<K, V> {
    int size();
    boolean isEmpty();

    interface Entry<K, V> {
        K getKey();
        V getValue();
    }
}

public interface SortedMap<K, V> extends Map<K, V> {}
public abstract class AbstractMap<K, V> implements Map<K, V> {}
public class HashMap<K, V> extends AbstractMap<K, V> implements Map<K, V> {}
public class LinkedHashMap<K, V> extends HashMap<K, V> implements Map<K, V> {}
public class TreeMap<K, V> extends AbstractMap<K, V> implements SortedMap<K, V> {}

public final class Optional<T> {
    public T get() { return null; }
    public boolean isPresent() { return false; }
}

public class Date implements java.io.Serializable, Cloneable, Comparable<Date> {
    public long getTime() { return 0L; }
}

public final class UUID implements java.io.Serializable, Comparable<UUID> {}
public final class Locale implements java.io.Serializable {}
"""

JAVA_SQL = """
package java.sql;

public class SQLException extends Exception implements Iterable<Throwable> {
    public String getSQLState() { return null; }
    public int getErrorCode() { return 0; }
    public SQLException getNextException() { return null; }
}

public class Timestamp extends java.util.Date {}
"""

JAVA_IO = """
package java.io;

public interface Serializable {}
public interface Closeable extends AutoCloseable {}
public class IOException extends Exception {}
public class FileNotFoundException extends IOException {}
public class UncheckedIOException extends RuntimeException {}
public class File implements Serializable, Comparable<File> {}
"""

JAVA_NIO_FILE = """
package java.nio.file;

public interface Path extends Comparable<Path>, Iterable<Path> {
    Path getFileName();
    Path getParent();
}
"""

JAVA_MATH = """
package java.math;

public class BigDecimal extends Number implements Comparable<BigDecimal> {}
public class BigInteger extends Number implements Comparable<BigInteger> {}
"""

JAVA_TIME = """
package java.time;

public final class LocalDate implements Comparable<LocalDate>, java.io.Serializable {}
public final class LocalDateTime implements Comparable<LocalDateTime>, java.io.Serializable {}
public final class LocalTime implements Comparable<LocalTime>, java.io.Serializable {}
public final class Instant implements Comparable<Instant>, java.io.Serializable {}
public final class ZonedDateTime implements Comparable<ZonedDateTime>, java.io.Serializable {}
public final class OffsetDateTime implements Comparable<OffsetDateTime>, java.io.Serializable {}
public final class Duration implements Comparable<Duration>, java.io.Serializable {}
public final class Period implements java.io.Serializable {}
"""

JDK_SOURCES = {
    "java/lang": JAVA_LANG,
    "java/util": JAVA_UTIL,
    "java/sql": JAVA_SQL,
    "java/io": JAVA_IO,
    "java/nio/file": JAVA_NIO_FILE,
    "java/math": JAVA_MATH,
    "java/time": JAVA_TIME,
}


@lru_cache(maxsize=1)
def _jdk_catalog() -> TypeCatalog:
    from assertgen.adapters.java_adapter import JavaAdapter

    adapter = JavaAdapter()
    catalog = TypeCatalog()
    for name, code in JDK_SOURCES.items():
        adapter.process_compilation_unit(code, catalog, source_file=f"<jdk>/{name}")
    catalog.link_hierarchy()
    return catalog


def new_catalog() -> TypeCatalog:
    """A fresh catalog holding the JDK declarations."""
    catalog = TypeCatalog()
    catalog.g = _jdk_catalog().g.copy()
    catalog.g.graph["parse_errors"] = []
    return catalog
