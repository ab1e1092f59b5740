import aspub.common as a_common

import aspub.lib.shape as a_shape

import aspub.tests.utils as a_t_utils

class ShapeTest(a_t_utils.PubTest):

    def test_shape_unpack(self):
        self.eq(a_shape.unpack('a', str.upper), ['A'])
        self.eq(a_shape.unpack(['a', 'b'], str.upper), ['A', 'B'])
        self.eq(a_shape.unpack([], str.upper), [])

        # an object is a single value
        self.eq(a_shape.unpack({'a': 1}, dict), [{'a': 1}])

    def test_shape_pack(self):
        self.true(a_shape.pack([], str.upper) is a_common.novalu)
        self.true(a_shape.pack(None, str.upper) is a_common.novalu)
        self.eq(a_shape.pack(['a'], str.upper), 'A')
        self.eq(a_shape.pack(['a', 'b'], str.upper), ['A', 'B'])
