import unittest
import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))
from filters import Filter, FilteredLayer, PlainLayer, get_filters, max_filter_size
from errors import InvalidShapeError

class TestGetFilters(unittest.TestCase):
    def setUp(self):
        self.f1 = Filter([1.0, 2.0, 3.0, 4.0])
        self.f2 = Filter([5.0, 6.0, 7.0, 8.0])
        self.f3 = Filter([float(i) for i in range(9)])
        self.layers = [
            FilteredLayer([self.f1, self.f2], width=2, height=2, depth=1),
            PlainLayer('relu'),
            FilteredLayer([self.f3], width=3, height=3, depth=1),
        ]

    def test_plain_layers_are_dropped(self):
        """[conv(f1, f2), relu, conv(f3)] -> 2 rows with 2 and 1 filters"""
        filters = get_filters(self.layers)
        self.assertEqual(len(filters), 2)
        self.assertEqual(len(filters[0]), 2)
        self.assertEqual(len(filters[1]), 1)
        self.assertEqual(filters[0][1], [5.0, 6.0, 7.0, 8.0])
        self.assertEqual(filters[1][0], [float(i) for i in range(9)])

    def test_no_filtered_layers(self):
        self.assertEqual(get_filters([PlainLayer('input'), PlainLayer('softmax')]), [])
        self.assertEqual(get_filters([]), [])

    def test_mapping_weights_keep_insertion_order(self):
        """ConvNetJS style {"0": .., "1": ..} weight maps"""
        f = Filter({'0': 0.5, '1': -1.0, '2': 2.0, '3': 0.0})
        filters = get_filters([FilteredLayer([f], width=2, height=2)])
        self.assertEqual(filters[0][0], [0.5, -1.0, 2.0, 0.0])

    def test_output_is_a_copy(self):
        filters = get_filters(self.layers)
        filters[0][0].clear()
        self.assertEqual(self.f1.values(), [1.0, 2.0, 3.0, 4.0])

    def test_size_mismatch(self):
        layers = [FilteredLayer([[1.0, 2.0, 3.0]], width=2, height=2, depth=1)]
        with self.assertRaises(InvalidShapeError):
            get_filters(layers)

    def test_max_filter_size(self):
        layers = self.layers + [FilteredLayer([[0.0] * 50], width=5, height=5, depth=2)]
        self.assertEqual(max_filter_size(layers), 50)
        self.assertEqual(max_filter_size(self.layers), 9)
        self.assertEqual(max_filter_size([PlainLayer()]), 0)

if __name__ == '__main__':
    unittest.main()
