import timeit

def bench_codec():
    print('Benchmarking encode / decode')
    for name, setup in [('text', 'data = 2000 * b"the quick brown fox "'),
                        ('random', 'import os; data = os.urandom(40000)'),
                        ('one symbol', 'data = 40000 * b"x"')]:
        setup = ('from huffpack import encode_bytes, decode_bytes;' +
                 setup + '; enc = encode_bytes(data)')
        print('=== Testing ' + name)
        for op in 'encode_bytes(data)', 'decode_bytes(enc)':
            t = min(timeit.repeat(op, setup, number=3, repeat=3)) / 3
            print('%-24s %.6f sec' % (op + ' took:', t))
        print('')

def run():
    bench_codec()

if __name__ == '__main__':
    run()
